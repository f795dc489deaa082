import argparse
import inspect
from pathlib import Path

from ..metadata import read_metadata
from ..tags import Format


class Command:
    name = "read"
    help = "read metadata tags from images"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "import_path",
            help="Paths to your images or directories of images.",
            nargs="+",
            type=Path,
        )
        parser.add_argument(
            "--tags",
            help="Tags to read, by registry key (GPS_LATITUDE) or exiftool name (GPSLatitude). [default: all known tags]",
            nargs="+",
            default=None,
            required=False,
        )
        parser.add_argument(
            "--format",
            help="Output format of the values. [default: %(default)s]",
            choices=[f.value for f in Format],
            default=Format.HUMAN_READABLE.value,
            required=False,
        )
        parser.add_argument(
            "--json",
            help="Print metadata as JSON, with values converted to their tag types.",
            dest="json_output",
            action="store_true",
            default=False,
            required=False,
        )
        parser.add_argument(
            "--skip_subfolders",
            help="Skip all subfolders and import only the images in the given IMPORT_PATH.",
            action="store_true",
            default=False,
            required=False,
        )

    def run(self, vars_args: dict):
        read_metadata(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(read_metadata).args
                }
            )
        )
