import argparse
import inspect

from ..metadata import show_version


class Command:
    name = "version"
    help = "show the version of the exiftool executable"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        pass

    def run(self, vars_args: dict):
        show_version(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(show_version).args
                }
            )
        )
