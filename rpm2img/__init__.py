# SPDX-License-Identifier: BUSL-1.1
"""rpm2img - build and promote appliance images with docker."""

__version__ = "0.1.0"
