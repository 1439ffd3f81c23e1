"""Permission and type checks on file-level"""

import functools
import operator
import stat

from fsprobe.fsprobe_identity import (
    IdentitySnapshot,
)
from fsprobe.fsprobe_path import (
    PathSnapshot,
)

from .common import (
    INVALID_LABEL_MISSING,
    INVALID_LABEL_PERMISSION,
    INVALID_LABEL_TYPE,
    INVALID_LABEL_UNREADABLE,
    Validator,
)


PERMISSION_GROUP_READ = [stat.S_IRGRP]
PERMISSION_GROUP_READ_WRITE = [stat.S_IRGRP, stat.S_IWGRP]

LABEL_PATH_VALIDATOR = 'PathValidator'

REQUIRE_EXISTS = 'exists'
REQUIRE_READ = 'read'
REQUIRE_WRITE = 'write'
REQUIRE_EXECUTE = 'execute'
REQUIRE_DIRECTORY = 'directory'
REQUIRE_FILE = 'file'
REQUIREMENTS = [REQUIRE_EXISTS, REQUIRE_READ, REQUIRE_WRITE,
                REQUIRE_EXECUTE, REQUIRE_DIRECTORY, REQUIRE_FILE]


class FSReadException(Exception):
    """Path can't be inspected or read by
    the running process"""


class FSWriteException(Exception):
    """Path can't be written by the running process"""


def _snapshot(res_path) -> PathSnapshot:
    if isinstance(res_path, PathSnapshot):
        return res_path
    return PathSnapshot(res_path)


def resource_can_be(res_path, modi) -> bool:
    """Check permission bits regardless of ownership

    modi is a list of stat.S_I* bits, each of them
    must be set. Raises FSReadException if the path
    can't be inspected at all.
    """

    snapshot = _snapshot(res_path)
    if snapshot.has_error():
        raise FSReadException(f"Can't inspect {snapshot.path}") from snapshot.error()
    return snapshot.has_permission(functools.reduce(operator.or_, modi, 0))


def group_can_read(res_path) -> bool:
    return resource_can_be(res_path, PERMISSION_GROUP_READ)


def group_can_write(res_path) -> bool:
    """Group may read and write"""
    return resource_can_be(res_path, PERMISSION_GROUP_READ_WRITE)


def ensure_readable(res_path, identity: IdentitySnapshot = None) -> PathSnapshot:
    """Fail fast if running process may not read resource"""

    snapshot = _snapshot(res_path)
    if not snapshot.can_read(identity):
        raise FSReadException(f'No permission to read {snapshot.path}!')
    return snapshot


def ensure_writable(res_path, identity: IdentitySnapshot = None) -> PathSnapshot:
    """Fail fast if running process may not write resource"""

    snapshot = _snapshot(res_path)
    if not snapshot.can_write(identity):
        raise FSWriteException(f'No permission to write {snapshot.path}!')
    return snapshot


class PathValidator(Validator):
    """Validate path against list of requirements,
    i.e. it must exist, be a directory and be
    writable for the current process

    A path whose status can't be retrieved still
    satisfies 'exists', but fails any other
    requirement as unreadable.
    """

    def __init__(self, input_data, requirements=None,
                 identity: IdentitySnapshot = None):
        super().__init__(LABEL_PATH_VALIDATOR, _snapshot(input_data), identity)
        if requirements is None:
            requirements = [REQUIRE_EXISTS]
        unknown = [r for r in requirements if r not in REQUIREMENTS]
        if unknown:
            raise ValueError(f"unknown requirements {unknown}, use {REQUIREMENTS}")
        self.requirements = requirements

    def _needs_status(self) -> bool:
        return any(r != REQUIRE_EXISTS for r in self.requirements)

    def _inspect(self):
        snapshot: PathSnapshot = self.input_data
        if not snapshot.exists():
            self._reject(INVALID_LABEL_MISSING)
            return
        if snapshot.has_error():
            if self._needs_status():
                self._reject(f"{INVALID_LABEL_UNREADABLE} {snapshot.error()}")
            return
        if REQUIRE_DIRECTORY in self.requirements and not snapshot.is_directory():
            self._reject(f"{INVALID_LABEL_TYPE} {REQUIRE_DIRECTORY}")
        if REQUIRE_FILE in self.requirements and not snapshot.is_regular_file():
            self._reject(f"{INVALID_LABEL_TYPE} {REQUIRE_FILE}")
        checks = {
            REQUIRE_READ: snapshot.can_read,
            REQUIRE_WRITE: snapshot.can_write,
            REQUIRE_EXECUTE: snapshot.can_execute,
        }
        for requirement, check in checks.items():
            if requirement in self.requirements and not check(self.identity):
                self._reject(f"{INVALID_LABEL_PERMISSION} {requirement}")
