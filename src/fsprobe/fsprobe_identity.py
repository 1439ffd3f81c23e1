"""Identity of the running process"""

import dataclasses

from .fsprobe_platform import (
    StatusCapability,
    current_capability,
)


@dataclasses.dataclass(frozen=True)
class IdentitySnapshot:
    """Real and effective user/group ids of the
    process at time of capture

    Not refreshed if the process changes its
    privileges afterwards.
    """

    user_id: int
    group_id: int
    effective_user_id: int
    effective_group_id: int


def capture_identity(capability: StatusCapability = None) -> IdentitySnapshot:
    """Query operating system for current process identity

    Each call performs fresh lookups, nothing is cached.
    Raises UnsupportedPlatformException if host has no
    notion of user/group ids.
    """

    if capability is None:
        capability = current_capability()
    uid, gid, euid, egid = capability.process_identity()
    return IdentitySnapshot(uid, gid, euid, egid)
