# Thumper Default Configuration
# Default configuration as Python dict and YAML generator

from typing import Any

import yaml

from thumper.config.schema import DEFAULT_ENDPOINT, DEFAULT_LOCKFILE

DEFAULT_CONFIG: dict[str, Any] = {
    "endpoint": DEFAULT_ENDPOINT,
    "lockfile": DEFAULT_LOCKFILE,
    "concurrency": None,
    "ignore": [],
    "verbose": False,
    "html_barrier": False,
    "output": {
        "colored": None,
    },
}

_HEADER = """\
# thumper configuration
#
# Defaults applied to every `thumper sync`. Command-line options win;
# ignore prefixes from this file and from --ignore are combined.
#
#   endpoint:      storage API host (regional endpoints: ny.storage.bunnycdn.com, ...)
#   lockfile:      name of the lock marker placed in the zone root during a sync
#   concurrency:   worker threads for listing and uploading (null = CPU count)
#   ignore:        remote prefixes that are never deleted
#   html_barrier:  wait for all assets before uploading any HTML page

"""


def generate_default_config() -> str:
    """
    Generate the default configuration file content.

    Returns:
        YAML text with an explanatory header.
    """
    body = yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return _HEADER + body
