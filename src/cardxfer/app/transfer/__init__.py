from cardxfer.app.transfer.display import format_resolution, format_result
from cardxfer.app.transfer.session import session

__all__ = ["format_resolution", "format_result", "session"]
