"""SmartGoals: turn a goal into a task plan and track it over a rolling week."""

__version__ = "0.1.0"
