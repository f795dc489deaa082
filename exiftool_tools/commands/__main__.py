import argparse
import enum
import logging
import sys

from .. import constants, exceptions, VERSION
from ..utils import configure_logger, get_app_name
from . import configure, read, version, write

exiftool_tools_commands = [
    version,
    read,
    write,
    configure,
]


# Root logger of exiftool_tools (not including third-party libraries)
LOG = logging.getLogger(get_app_name())


# Handle shared arguments/options here
def add_general_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profile",
        help="Name of the configuration profile to use. [default: %(default)s]",
        default=constants.DEFAULT_PROFILE,
        required=False,
    )
    parser.add_argument(
        "--exiftool_path",
        help="Path to the exiftool executable. [default: from the profile, or $EXIFTOOL_TOOLS_EXIFTOOL_PATH]",
        default=None,
        required=False,
    )
    parser.add_argument(
        "--stay_open",
        help="Keep a single exiftool process running for all images.",
        action=argparse.BooleanOptionalAction,
        default=None,
        required=False,
    )


def _log_params(argvars: dict) -> None:
    MAX_ENTRIES = 5

    def _stringify(x) -> str:
        if isinstance(x, enum.Enum):
            return x.value
        else:
            return str(x)

    for k, v in argvars.items():
        if v is None:
            continue
        if callable(v):
            continue
        if isinstance(v, (list, set, tuple)):
            entries = [_stringify(x) for x in v]
            if len(entries) <= MAX_ENTRIES:
                v = ", ".join(entries)
            else:
                v = (
                    ", ".join(entries[:MAX_ENTRIES])
                ) + f" and {len(entries) - MAX_ENTRIES} more"
        else:
            v = _stringify(v)
        LOG.debug("CLI param: %s: %s", k, v)


def log_exception(ex: Exception) -> None:
    if LOG.isEnabledFor(logging.DEBUG):
        exc_info = ex
    else:
        exc_info = None

    LOG.error(f"{ex.__class__.__name__}: {ex}", exc_info=exc_info)


def main(argv=None):
    version_text = f"exiftool_tools version {VERSION}"

    parser = argparse.ArgumentParser(
        get_app_name(),
    )
    parser.add_argument(
        "--version",
        help="show the version of exiftool_tools and exit",
        action="version",
        version=version_text,
    )
    parser.add_argument(
        "--verbose",
        help="show verbose",
        action="store_true",
        default=False,
        required=False,
    )
    parser.set_defaults(func=lambda _: parser.print_help())

    all_commands = [module.Command() for module in exiftool_tools_commands]

    subparsers = parser.add_subparsers(
        description="please choose one of the available subcommands",
    )
    for command in all_commands:
        cmd_parser = subparsers.add_parser(
            command.name, help=command.help, conflict_handler="resolve"
        )
        add_general_arguments(cmd_parser)
        command.add_basic_arguments(cmd_parser)
        cmd_parser.set_defaults(func=command.run)

    args = parser.parse_args(argv)

    configure_logger(LOG, level=logging.DEBUG if args.verbose else logging.INFO)

    LOG.debug("%s", version_text)
    argvars = vars(args)
    _log_params(argvars)

    try:
        args.func(argvars)

    except exceptions.ExifToolError as ex:
        log_exception(ex)
        sys.exit(ex.exit_code)

    except KeyboardInterrupt:
        LOG.info("Interrupted by user...")
        sys.exit(130)


if __name__ == "__main__":
    main()
