"""
Planning core.

Components:
- models.py: enums and frozen dataclasses (Task, Goal, DailyStat, TaskFilter)
- planner.py: goal -> five task drafts from a static template table
- status.py: todo -> doing -> done cycle
- state.py: PlannerState snapshot + load_initial_state
- store.py: copy-on-write mutators returning (state, success)
- stats.py: read-side aggregations (daily stats, completion rate, streak, ...)
- serialization.py: plain-record codec used at the persistence boundary
"""
