# src/smartgoals/cli/commands.py

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import date, timedelta

from ..core import stats
from ..core import store as core_store
from ..core.models import ALL, Category, Goal, Priority, Task, TaskFilter, TaskStatus, Timeframe
from ..core.state import PlannerState
from ..core.timeline import date_label, parse_date, today
from .bootstrap import AppSession, apply_result

CommandHandler = Callable[[AppSession, list[str]], str]

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    TaskStatus.TODO: "[ ]",
    TaskStatus.DOING: "[~]",
    TaskStatus.DONE: "[x]",
}


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /goal, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, session: AppSession, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."
        return handler(session, parts[1:])

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _hours(value: float) -> str:
    return f"{value:g}h"


def _task_refs(state: PlannerState) -> dict[tuple[str, str], str]:
    """Positional references "<goal#>.<task#>" (1-based) for every task."""
    refs: dict[tuple[str, str], str] = {}
    for g_num, goal in enumerate(state.goals, start=1):
        for t_num, task in enumerate(goal.tasks, start=1):
            refs[(goal.id, task.id)] = f"{g_num}.{t_num}"
    return refs


def _resolve_goal(state: PlannerState, ref: str) -> Goal | None:
    if not ref.isdigit():
        return None
    idx = int(ref) - 1
    if 0 <= idx < len(state.goals):
        return state.goals[idx]
    return None


def _resolve_task(state: PlannerState, ref: str) -> tuple[Goal, Task] | None:
    goal_ref, sep, task_ref = ref.partition(".")
    if not sep or not task_ref.isdigit():
        return None
    goal = _resolve_goal(state, goal_ref)
    if goal is None:
        return None
    idx = int(task_ref) - 1
    if 0 <= idx < len(goal.tasks):
        return goal, goal.tasks[idx]
    return None


def _parse_day(raw: str, ref: date) -> date:
    word = raw.lower()
    if word == "today":
        return ref
    if word == "tomorrow":
        return ref + timedelta(days=1)
    if word == "yesterday":
        return ref - timedelta(days=1)
    return parse_date(raw)


def _format_task(task: Task, ref: str) -> str:
    line = (
        f"{STATUS_MARKS[task.status]} {ref} {task.title} "
        f"({task.priority.value}, {_hours(task.estimated_time)}, {task.category.value}) "
        f"due {task.due_date.isoformat()}"
    )
    if task.ai_generated:
        line += " *"
    return line


def _describe_filters(flt: TaskFilter) -> str:
    return f"category={flt.category}, priority={flt.priority}"


# ---- commands ----


def cmd_help(session: AppSession, args: list[str]) -> str:
    return registry.build_help()


def cmd_goal(session: AppSession, args: list[str]) -> str:
    """
    /goal <category> <timeframe> <title...>
    """
    usage = (
        "Usage: /goal <category> <timeframe> <title...>\n"
        f"  categories: {', '.join(c.value for c in Category)}\n"
        f"  timeframes: {', '.join(t.value for t in Timeframe)}"
    )
    if len(args) < 3:
        return usage
    try:
        category = Category(args[0].lower())
        timeframe = Timeframe(args[1].lower())
    except ValueError:
        return usage

    title = " ".join(args[2:])
    result = core_store.create_goal(session.planner, title, category, timeframe, now=session.now())
    if not apply_result(session, result):
        return "Goal title required."

    goal = session.planner.goals[-1]
    g_num = len(session.planner.goals)
    lines = [f'Goal #{g_num} "{goal.title}" created with {len(goal.tasks)} tasks:']
    for t_num, task in enumerate(goal.tasks, start=1):
        lines.append("  " + _format_task(task, f"{g_num}.{t_num}"))
    return "\n".join(lines)


def cmd_task(session: AppSession, args: list[str]) -> str:
    """
    /task <category> <priority> <due> <hours|-> <title...> [| description]
    """
    usage = (
        "Usage: /task <category> <priority> <due> <hours|-> <title...> [| description]\n"
        "  due: today | tomorrow | YYYY-MM-DD"
    )
    if len(args) < 5:
        return usage

    try:
        category = Category(args[0].lower())
        priority = Priority(args[1].lower())
        due = _parse_day(args[2], today(session.now()))
        hours = session.settings.quick_task_hours if args[3] == "-" else float(args[3])
    except ValueError:
        return usage
    if not math.isfinite(hours) or hours <= 0:
        return "Estimated hours must be positive."

    title, _, description = " ".join(args[4:]).partition("|")
    result = core_store.create_quick_task(
        session.planner,
        title.strip(),
        description.strip(),
        category,
        priority,
        due,
        hours,
        now=session.now(),
    )
    if not apply_result(session, result):
        return "Task title required."

    first = session.planner.goals[0]
    ref = f"1.{len(first.tasks)}"
    return f'Task {ref} added to "{first.title}".'


def cmd_goals(session: AppSession, args: list[str]) -> str:
    goals = session.planner.goals
    if not goals:
        return "No goals yet. Use /goal to create one."

    lines = []
    for g_num, goal in enumerate(goals, start=1):
        progress = stats.goal_progress(goal)
        lines.append(
            f"#{g_num} {goal.title} [{goal.category.value}/{goal.timeframe.value}] "
            f"{progress.completed}/{progress.total} done, {progress.doing} doing "
            f"({round(progress.percent)}%)"
        )
        for t_num, task in enumerate(goal.tasks, start=1):
            lines.append("    " + _format_task(task, f"{g_num}.{t_num}"))
    return "\n".join(lines)


def cmd_day(session: AppSession, args: list[str]) -> str:
    ref_day = today(session.now())
    try:
        day = _parse_day(args[0], ref_day) if args else ref_day
    except ValueError:
        return "Usage: /day [today|tomorrow|yesterday|YYYY-MM-DD]"

    views = stats.tasks_on_date(session.planner, day, session.filters)
    progress = stats.day_progress(session.planner, day, session.filters)
    refs = _task_refs(session.planner)
    header = (
        f"{date_label(day, reference=ref_day)} ({day.isoformat()}): "
        f"{progress.completed}/{progress.total} ({round(progress.percent)}%)"
    )
    if not views:
        return header + "\n  No tasks."
    lines = [header]
    for v in views:
        lines.append("  " + _format_task(v.task, refs[(v.goal_id, v.task.id)]) + f" <{v.goal_title}>")
    return "\n".join(lines)


def cmd_week(session: AppSession, args: list[str]) -> str:
    ref_day = today(session.now())
    refs = _task_refs(session.planner)
    days = stats.timeline(
        session.planner,
        ref_day,
        session.planner.window_length,
        session.filters,
        reference=ref_day,
    )
    lines = [f"Filters: {_describe_filters(session.filters)}"]
    for bucket in days:
        progress = bucket.progress
        lines.append(f"{bucket.label} ({bucket.date.isoformat()}): {progress.completed}/{progress.total}")
        for v in bucket.tasks:
            lines.append("    " + _format_task(v.task, refs[(v.goal_id, v.task.id)]))
    return "\n".join(lines)


def cmd_next(session: AppSession, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /next <goal#>.<task#>"
    found = _resolve_task(session.planner, args[0])
    if found is None:
        return f"Task {args[0]} not found."
    goal, task = found
    result = core_store.advance_task_status(session.planner, goal.id, task.id, now=session.now())
    if not apply_result(session, result):
        return f"Task {args[0]} not found."
    # Advancing never reorders tasks, so the same reference still points at it.
    _, updated = _resolve_task(session.planner, args[0])
    return f'Task {args[0]} "{updated.title}" -> {updated.status.value}.'


def cmd_rm(session: AppSession, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <goal#>.<task#>"
    found = _resolve_task(session.planner, args[0])
    if found is None:
        return f"Task {args[0]} not found."
    goal, task = found
    result = core_store.delete_task(session.planner, goal.id, task.id, now=session.now())
    if not apply_result(session, result):
        return f"Task {args[0]} not found."
    return f'Task "{task.title}" removed.'


def cmd_rmgoal(session: AppSession, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rmgoal <goal#>"
    goal = _resolve_goal(session.planner, args[0])
    if goal is None:
        return f"Goal {args[0]} not found."
    result = core_store.delete_goal(session.planner, goal.id, now=session.now())
    if not apply_result(session, result):
        return f"Goal {args[0]} not found."
    return f'Goal "{goal.title}" removed with {len(goal.tasks)} tasks.'


def cmd_filter(session: AppSession, args: list[str]) -> str:
    """
    /filter                     -> show current filter
    /filter <category|all> [priority|all]
    """
    if not args:
        return f"Filters: {_describe_filters(session.filters)}"
    category = args[0].lower()
    priority = args[1].lower() if len(args) > 1 else ALL
    try:
        session.filters = TaskFilter.parse(category, priority)
    except ValueError:
        return (
            "Usage: /filter <category|all> [priority|all]\n"
            f"  categories: {', '.join(c.value for c in Category)}\n"
            f"  priorities: {', '.join(p.value for p in Priority)}"
        )
    return f"Filters: {_describe_filters(session.filters)}"


def cmd_stats(session: AppSession, args: list[str]) -> str:
    state = session.planner
    views = stats.all_tasks(state)
    done = sum(1 for v in views if v.task.status == TaskStatus.DONE)
    lines = [
        f"Completion rate: {round(stats.completion_rate(state))}% ({done} of {len(views)} tasks)",
        f"Hours completed: {_hours(stats.total_hours_completed(state))} "
        f"(avg {stats.average_hours_per_completed(state):.1f}h per task)",
        f"Streak: {stats.streak(state)} active day(s) this week",
        f"Goals: {len(state.goals)}",
        "Categories:",
    ]
    for category, count in stats.category_breakdown(state).items():
        pct = round(count.completed / count.total * 100) if count.total else 0
        lines.append(f"  {category.value:<8} {count.completed}/{count.total} ({pct}%)")
    lines.append(f"Next {len(state.daily_stats)} days:")
    ref_day = today(session.now())
    for s in state.daily_stats:
        lines.append(
            f"  {date_label(s.date, reference=ref_day):<12} "
            f"{s.completed}/{s.total} done, {_hours(s.hours_spent)}"
        )
    return "\n".join(lines)


def cmd_insights(session: AppSession, args: list[str]) -> str:
    info = stats.insights(session.planner, session.filters, now=session.now())
    lines = [
        "Today's focus:",
        f"  You have {info.today_tasks} tasks today. Start with high-priority items for maximum impact.",
        "Productivity insights:",
        f"  - Your completion rate is {info.completion_rate}%",
        f"  - You're on a {info.streak}-day streak!",
        f"  - {_hours(info.hours_completed)} of productive work completed",
        "Pro tips:",
    ]
    lines.extend(f"  - {tip}" for tip in info.tips)
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("goal", cmd_goal, help_text="Create a goal with a generated plan: /goal <category> <timeframe> <title>.")
registry.register(
    "task",
    cmd_task,
    help_text="Quick task: /task <category> <priority> <due> <hours|-> <title> [| description].",
    aliases=["add"],
)
registry.register("goals", cmd_goals, help_text="List goals with progress and tasks.")
registry.register("day", cmd_day, help_text="Tasks due on a day: /day [today|tomorrow|YYYY-MM-DD].")
registry.register("week", cmd_week, help_text="Seven-day timeline from today.", aliases=["timeline"])
registry.register("next", cmd_next, help_text="Advance task status todo -> doing -> done: /next 1.2.", aliases=["mv"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm 1.2.")
registry.register("rmgoal", cmd_rmgoal, help_text="Delete a goal and its tasks: /rmgoal 1.")
registry.register("filter", cmd_filter, help_text="Set filters: /filter <category|all> [priority|all].")
registry.register("stats", cmd_stats, help_text="Completion rate, hours, streak, category balance.")
registry.register("insights", cmd_insights, help_text="Today's focus and productivity insights.", aliases=["ai"])
