"""Issue assistant components.

- Settings loaded from .env
- Structured logging
- Issue-intent analysis and improvement
- GitHub issue publishing
- The interactive session state machine
"""
