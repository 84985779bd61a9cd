"""InterviewIQ: mock-interview sessions with AI questions, feedback and speech."""

__version__ = "1.0.0"
