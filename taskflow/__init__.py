"""taskflow: task, pomodoro and preferences tracking backend."""

__version__ = "1.0.0"
