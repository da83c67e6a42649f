"""bashtutor - Interactive Bash scripting tutorial for the terminal."""

__version__ = "0.1.0"
