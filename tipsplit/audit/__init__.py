"""Change logging package."""

from tipsplit.audit.logger import ChangeLogger, configure_logging, create_session_id

__all__ = ["ChangeLogger", "configure_logging", "create_session_id"]
