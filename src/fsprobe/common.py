"""common constants"""

import logging
import sys

XMLNS = {
    'fsp': 'urn:fsprobe:inspection:v1',
}


UNSET_LABEL = 'n.a.'
UNSET_NUMBR = -1


class FSProbeException(Exception):
    """Common base for all fsprobe failures"""


class PathNotFoundException(FSProbeException):
    """Mark path which does not exist at all"""


class StatusUnavailableException(FSProbeException):
    """Mark path whose status couldn't be
    retrieved due permissions, I/O errors
    and the like, although it may exist"""


class IdentityFieldUnavailableException(FSProbeException):
    """Owner or group identifier can't be
    taken from the status data, i.e. since
    there is no status data at all"""


class UnsupportedPlatformException(IdentityFieldUnavailableException):
    """Host system doesn't provide the
    POSIX user/group identity model"""


class FallbackLogger:
    """Different way to inject logging facilities"""

    def __init__(self, some_logger=None):
        self._logger: logging.Logger = some_logger

    def log(self, message: str, *args, level = logging.INFO):
        """Encapsulate Loggin"""
        if self._logger:
            self._logger.log(level, message, *args)
        elif level >= logging.INFO:
            message = message.replace('%s','{}')
            if args is not None and len(args) > 0:
                message = message.format(*args)
            if level >= logging.ERROR:
                print(message, file=sys.stderr)
            else:
                print(message)
