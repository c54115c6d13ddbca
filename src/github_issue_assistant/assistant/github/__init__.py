"""GitHub integration: PyGithub wrapper and issue publishing."""
