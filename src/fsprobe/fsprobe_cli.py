"""Command line inspection of filesystem paths"""

import argparse
import configparser
import logging
import sys
import typing

from pathlib import Path

import fsprobe.fsprobe_report as fsr

from .fsprobe_identity import (
    capture_identity,
)
from .fsprobe_path import (
    PathSnapshot,
)
from .common import (
    UnsupportedPlatformException,
)
from .validate import (
    REQUIREMENTS,
    PathValidator,
)

CONFIG_SECTION = 'fsprobe'
FORMAT_TEXT = 'text'
FORMAT_XML = 'xml'
FORMATS = [FORMAT_TEXT, FORMAT_XML]
DEFAULT_LOG_LEVEL = 'WARNING'
LOGGER_NAME = 'fsprobe'

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG = 2

LOG_FORMATTER = logging.Formatter(
    "%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S")


class ConfigurationException(Exception):
    """Mark invalid or missing configuration"""


def _parser() -> argparse.ArgumentParser:
    argp = argparse.ArgumentParser(prog='fsprobe',
                                   description="Inspect type and permissions of paths")
    argp.add_argument("paths", nargs='+', help="paths to inspect")
    argp.add_argument("-c", "--config", required=False)
    argp.add_argument("--no-follow", dest="no_follow", action='store_true',
                      help="inspect symbolic links themselves")
    argp.add_argument("--format", required=False, choices=FORMATS)
    argp.add_argument("--require", required=False,
                      help=f"comma separated requirements out of {REQUIREMENTS}")
    argp.add_argument("--log-level", dest="log_level", required=False)
    return argp


def read_config(the_args: typing.Dict) -> configparser.ConfigParser:
    """Merge optional config file with command line
    arguments, latter take precedence"""

    the_config = configparser.ConfigParser()
    the_config.add_section(CONFIG_SECTION)
    if the_args.get("config") is not None:
        cfg_file = Path(the_args["config"])
        if not cfg_file.is_file():
            raise ConfigurationException(f"config file missing: {cfg_file.resolve()}")
        try:
            the_config.read(cfg_file, encoding='utf-8')
        except (configparser.Error, UnicodeDecodeError) as cfg_err:
            raise ConfigurationException(f"invalid config {cfg_file}: {cfg_err}") from cfg_err
    if the_args.get("no_follow"):
        the_config.set(CONFIG_SECTION, "follow_symlinks", "false")
    if the_args.get("format") is not None:
        the_config.set(CONFIG_SECTION, "format", the_args["format"])
    if the_args.get("require") is not None:
        the_config.set(CONFIG_SECTION, "require", the_args["require"])
    if the_args.get("log_level") is not None:
        the_config.set(CONFIG_SECTION, "log_level", the_args["log_level"])

    out_format = the_config.get(CONFIG_SECTION, "format", fallback=FORMAT_TEXT)
    if out_format not in FORMATS:
        raise ConfigurationException(f"format must be one of {FORMATS}, got '{out_format}'")
    try:
        the_config.getboolean(CONFIG_SECTION, "follow_symlinks", fallback=True)
    except ValueError as val_err:
        raise ConfigurationException(f"follow_symlinks: {val_err.args[0]}") from val_err
    return the_config


def _requirements(the_config: configparser.ConfigParser) -> typing.List[str]:
    raw = the_config.get(CONFIG_SECTION, "require", fallback="")
    requirements = [r.strip() for r in raw.split(",") if len(r.strip()) > 0]
    unknown = [r for r in requirements if r not in REQUIREMENTS]
    if unknown:
        raise ConfigurationException(f"unknown requirements {unknown}, use {REQUIREMENTS}")
    return requirements


def _init_logger(level_name: str) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ConfigurationException(f"invalid log level '{level_name}'")
    # replace console handler from previous run, stderr may have changed
    for handler in [h for h in logger.handlers if h.get_name() == LOGGER_NAME]:
        logger.removeHandler(handler)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(LOGGER_NAME)
    console_handler.setFormatter(LOG_FORMATTER)
    logger.addHandler(console_handler)
    logger.setLevel(level)
    return logger


def main(argv=None) -> int:
    """Inspect all paths given and print report

    returns EXIT_INVALID if any requirement isn't met
    """

    the_args: typing.Dict = vars(_parser().parse_args(argv))
    try:
        the_config = read_config(the_args)
        requirements = _requirements(the_config)
        logger = _init_logger(the_config.get(CONFIG_SECTION, "log_level",
                                             fallback=DEFAULT_LOG_LEVEL))
    except ConfigurationException as cfg_err:
        print(f"fsprobe: {cfg_err}", file=sys.stderr)
        return EXIT_CONFIG
    follow = the_config.getboolean(CONFIG_SECTION, "follow_symlinks", fallback=True)
    out_format = the_config.get(CONFIG_SECTION, "format", fallback=FORMAT_TEXT)

    # same identity for all paths of one run
    try:
        identity = capture_identity()
    except UnsupportedPlatformException as unsupported:
        logger.warning("no process identity: %s", unsupported)
        identity = None

    exit_code = EXIT_OK
    reports = []
    for a_path in the_args["paths"]:
        snapshot = PathSnapshot(a_path, follow_symlinks=follow, logger=logger)
        reports.append(fsr.PathReport.of(snapshot, identity))
        if requirements:
            validator = PathValidator(snapshot, requirements, identity)
            if not validator.valid():
                exit_code = EXIT_INVALID
                for invalid in validator.invalids:
                    logger.error("%s: %s", invalid.location, invalid.info)

    if out_format == FORMAT_XML:
        print(fsr.to_xml(reports), end='')
    else:
        print((2 * '\n').join(fsr.to_text(r) for r in reports))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
