from enum import Enum


class Urgency(str, Enum):
    """Notification urgency levels understood by the desktop notification daemon.

    Values match the command-line tokens; member names match libnotify's
    ``Notify.Urgency`` members.
    """

    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"
