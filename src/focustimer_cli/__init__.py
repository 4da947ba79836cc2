"""focustimer CLI - a Pomodoro timer for the terminal."""

__version__ = "0.3.0"
