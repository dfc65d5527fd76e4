"""JIRA REST client, report data types, and renderers for markdown, Slack, text, Confluence storage format and the terminal."""

__version__ = "0.1.0"