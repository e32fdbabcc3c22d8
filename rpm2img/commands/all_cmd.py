# SPDX-License-Identifier: BUSL-1.1
"""rpm2img all: the whole factory-to-base workflow in one invocation."""

import sys

from rpm2img.commands.build import build
from rpm2img.commands.commit import commit, tag
from rpm2img.commands.console import cli, gui
from rpm2img.commands.run import evolve
from rpm2img.commands.stop import rm, stop
from rpm2img.config import WorkflowSettings
from rpm2img.utils import load_settings


# Step order; cli and gui block until the operator closes them
PIPELINE = (
    ("build", build),
    ("evolve", evolve),
    ("cli", cli),
    ("gui", gui),
    ("stop", stop),
    ("commit", commit),
    ("rm", rm),
    ("tag", tag),
)


def run_pipeline(settings: WorkflowSettings, steps=PIPELINE) -> bool:
    """Run steps in order, stopping at the first one that fails."""
    for name, step in steps:
        print(f"==> {name}")
        if not step(settings):
            print(f"Error: Step '{name}' failed; stopping.")
            return False
    return True


def cmd_all(args):
    settings = load_settings(args)
    if not run_pipeline(settings):
        sys.exit(1)
    print()
    print(f"Done. Base image: {settings.base_image}")
    print(f"      Tagged as:  {settings.latest_image}")
    print("Test it with: rpm2img run && rpm2img cli && rpm2img rm")
