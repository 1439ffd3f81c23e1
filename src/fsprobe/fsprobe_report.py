"""Render inspection results as plain text or XML"""

import dataclasses
import typing

from lxml import etree as ET

import fsprobe.common as fsc

from .fsprobe_identity import (
    IdentitySnapshot,
)
from .fsprobe_path import (
    PathSnapshot,
)

# please pylinter
# pylint:disable=c-extension-no-member

TYPE_DIRECTORY = 'directory'
TYPE_SYMLINK = 'symlink'
TYPE_FILE = 'file'
TYPE_CHAR_DEVICE = 'char_device'
TYPE_BLOCK_DEVICE = 'block_device'
TYPE_PIPE = 'pipe'
TYPE_SOCKET = 'socket'
TYPE_OTHER = 'other'

XML_PREAMBLE = '<?xml version="1.0" encoding="UTF-8"?>'


@dataclasses.dataclass
class PathReport:
    """Plain summary of a single PathSnapshot"""

    path: str
    exists: bool = False
    error: str = fsc.UNSET_LABEL
    file_type: str = fsc.UNSET_LABEL
    mode: str = fsc.UNSET_LABEL
    permissions: str = fsc.UNSET_LABEL
    size: int = fsc.UNSET_NUMBR
    owner_uid: int = fsc.UNSET_NUMBR
    owner_gid: int = fsc.UNSET_NUMBR
    can_read: bool = False
    can_write: bool = False
    can_execute: bool = False
    flags: typing.List[str] = dataclasses.field(default_factory=list)

    @staticmethod
    def of(snapshot: PathSnapshot, identity: IdentitySnapshot = None):
        """Gather everything a snapshot can tell"""

        report = PathReport(str(snapshot.path), exists=snapshot.exists())
        if snapshot.has_error():
            report.error = str(snapshot.error())
            return report
        report.file_type = _file_type(snapshot)
        report.mode = snapshot.mode_string()
        report.permissions = f"{snapshot.permissions:04o}"
        report.size = snapshot.size()
        try:
            report.owner_uid = snapshot.owner_user_id()
            report.owner_gid = snapshot.owner_group_id()
        except fsc.IdentityFieldUnavailableException:
            pass
        report.can_read = snapshot.can_read(identity)
        report.can_write = snapshot.can_write(identity)
        report.can_execute = snapshot.can_execute(identity)
        flag_checks = [
            ('setuid', snapshot.has_set_user_id),
            ('setgid', snapshot.has_set_group_id),
            ('sticky', snapshot.is_sticky),
            ('append', snapshot.is_append_only),
            ('exclusive', snapshot.is_exclusive),
            ('temporary', snapshot.is_temporary),
        ]
        report.flags = [label for label, check in flag_checks if check()]
        return report


def _file_type(snapshot: PathSnapshot) -> str:
    if snapshot.is_directory():
        return TYPE_DIRECTORY
    if snapshot.is_symlink():
        return TYPE_SYMLINK
    if snapshot.is_regular_file():
        return TYPE_FILE
    if snapshot.is_character_device():
        return TYPE_CHAR_DEVICE
    if snapshot.is_device():
        return TYPE_BLOCK_DEVICE
    if snapshot.is_named_pipe():
        return TYPE_PIPE
    if snapshot.is_socket():
        return TYPE_SOCKET
    return TYPE_OTHER


def _access_label(report: PathReport) -> str:
    labels = [('r', report.can_read), ('w', report.can_write), ('x', report.can_execute)]
    return ''.join(c if allowed else '-' for c, allowed in labels)


def to_text(report: PathReport) -> str:
    """Report as tab separated key/value lines"""

    lines = [f"path\t{report.path}", f"exists\t{report.exists}"]
    if report.error != fsc.UNSET_LABEL:
        lines.append(f"error\t{report.error}")
        return '\n'.join(lines)
    lines.extend([
        f"type\t{report.file_type}",
        f"mode\t{report.mode}",
        f"permissions\t{report.permissions}",
        f"size\t{report.size}",
        f"owner\t{report.owner_uid}:{report.owner_gid}",
        f"access\t{_access_label(report)}",
    ])
    if report.flags:
        lines.append(f"flags\t{','.join(report.flags)}")
    return '\n'.join(lines)


def to_xml_element(reports: typing.List[PathReport]):
    """Assemble reports as XML tree"""

    fsp = fsc.XMLNS['fsp']
    root = ET.Element(f'{{{fsp}}}inspection', nsmap={'fsp': fsp})
    for report in reports:
        el_path = ET.SubElement(root, f'{{{fsp}}}path')
        el_path.set('name', report.path)
        el_path.set('exists', str(report.exists).lower())
        if report.error != fsc.UNSET_LABEL:
            el_error = ET.SubElement(el_path, f'{{{fsp}}}error')
            el_error.text = report.error
            continue
        el_path.set('type', report.file_type)
        el_path.set('mode', report.mode)
        el_path.set('permissions', report.permissions)
        el_path.set('size', str(report.size))
        el_owner = ET.SubElement(el_path, f'{{{fsp}}}owner')
        el_owner.set('uid', str(report.owner_uid))
        el_owner.set('gid', str(report.owner_gid))
        el_access = ET.SubElement(el_path, f'{{{fsp}}}access')
        el_access.set('read', str(report.can_read).lower())
        el_access.set('write', str(report.can_write).lower())
        el_access.set('execute', str(report.can_execute).lower())
        for flag in report.flags:
            el_flag = ET.SubElement(el_path, f'{{{fsp}}}flag')
            el_flag.text = flag
    return root


def to_xml(reports: typing.List[PathReport], preamble=XML_PREAMBLE) -> str:
    """XML document as prettified string

    disable preamble by setting it to 'None'
    """

    xml_root = to_xml_element(reports)
    _formatted = ET.tostring(xml_root, pretty_print=True, encoding='UTF-8').decode('UTF-8')
    if preamble:
        return f'{preamble}\n{_formatted}'
    return _formatted
