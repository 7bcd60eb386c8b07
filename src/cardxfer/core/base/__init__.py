from cardxfer.core.base.agent import Agent, CardLink
from cardxfer.core.base.iso7816 import ISO7816
from cardxfer.core.base.message import Message, Result
from cardxfer.core.base.terminal import Terminal

__all__ = ["Agent", "CardLink", "ISO7816", "Message", "Result", "Terminal"]
