# SPDX-License-Identifier: BUSL-1.1
"""rpm2img describe: show resolved settings and image names."""

import yaml

from rpm2img.config.resources import resource_to_dict
from rpm2img.utils import load_settings


def cmd_describe(args):
    settings = load_settings(args)
    print(yaml.dump(resource_to_dict(settings), default_flow_style=False, sort_keys=False))
