"""Client library for the Jira REST and Agile APIs."""

__version__ = "0.1.0"