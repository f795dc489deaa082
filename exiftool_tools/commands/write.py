import argparse
import inspect
from pathlib import Path

from ..metadata import write_metadata


class Command:
    name = "write"
    help = "write metadata tags to images"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "import_path",
            help="Paths to your images or directories of images.",
            nargs="+",
            type=Path,
        )
        parser.add_argument(
            "--set",
            help="Tag assignment in the form TAG=VALUE, e.g. Artist=Jane. Can be repeated.",
            dest="set_values",
            action="append",
            metavar="TAG=VALUE",
            required=True,
        )
        parser.add_argument(
            "--skip_subfolders",
            help="Skip all subfolders and import only the images in the given IMPORT_PATH.",
            action="store_true",
            default=False,
            required=False,
        )

    def run(self, vars_args: dict):
        write_metadata(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(write_metadata).args
                }
            )
        )
