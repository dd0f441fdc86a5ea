"""CLI context for passing state between commands."""

import click


class BakeshContext:
    def __init__(self):
        self.config_path = None
        self.verbose = False


pass_context = click.make_pass_decorator(BakeshContext, ensure=True)
