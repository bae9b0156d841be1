from .constants import Notification, Phase, StatusType
from .errors import NO_ERROR, ErrorCondition, ErrorKind
from .status import Status, is_status_frame
