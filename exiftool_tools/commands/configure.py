import argparse
import inspect

from ..configure import configure_profile


class Command:
    name = "configure"
    help = "save exiftool settings to a profile"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--reopen_after_close",
            help="Allow an ExifTool instance to be used again after it was closed.",
            action=argparse.BooleanOptionalAction,
            default=None,
            required=False,
        )
        parser.add_argument(
            "--overwrite_original",
            help="Do not keep a backup of the original file when writing tags.",
            action=argparse.BooleanOptionalAction,
            default=None,
            required=False,
        )
        parser.add_argument(
            "--config_path",
            help="Path to the configuration file. [default: the user config directory]",
            default=None,
            required=False,
        )

    def run(self, vars_args: dict):
        configure_profile(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(configure_profile).args
                }
            )
        )
