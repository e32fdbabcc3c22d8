# SPDX-License-Identifier: BUSL-1.1
"""rpm2img init: first-run settings file."""

from rpm2img.config import ConfigError
from rpm2img.utils import die, store_for_args


# Settings asked for interactively, with their prompts
PROMPTS = (
    ("registry", "Registry (image name prefix)"),
    ("package_name", "Package name"),
    ("tag", "Image tag"),
    ("container_name", "Container name"),
)


def cmd_init(args):
    store = store_for_args(args)

    if store.is_initialized() and not getattr(args, "force", False):
        print("rpm2img is already initialized.")
        print(f"  Config: {store.config_file}")
        print("  Use --force to re-initialize.")
        return

    try:
        settings = store.resolve()
    except ConfigError as e:
        die(str(e))

    if not getattr(args, "defaults", False):
        answers = {}
        for field_name, prompt in PROMPTS:
            current = getattr(settings, field_name)
            answers[field_name] = input(f"{prompt} [{current}]: ").strip() or None
        settings = settings.with_overrides(**answers)

    store.save_settings(settings)
    print(f"[OK] Configuration saved to {store.config_file}")
    print()
    print("Images:")
    print(f"  factory: {settings.factory_image}")
    print(f"  base:    {settings.base_image}")
    print()
    print("Next steps:")
    print("  rpm2img build       Build the factory image")
    print("  rpm2img evolve      Start it, then use 'rpm2img cli' and 'rpm2img gui'")
    print("                      to accept the license")
    print("  rpm2img stop        Then commit, rm and tag to promote the base image")
    print("  rpm2img all         All of the above in one run")
