"""Default settings for AWS Search Tool."""

import os

from .utils import debug_print, split_csv

# DescribeTags on elbv2 accepts at most 20 resource ARNs per call
TAG_BATCH_SIZE = 20

DEFAULT_OUTPUT_FORMAT = "simple"

ENV_PREFIX = "AWSSEARCH"


def default_tag_columns(kind):
    """Tag columns configured in the environment for a resource kind.

    ``AWSSEARCH_<KIND>_TAG_COLUMNS`` is checked first, then
    ``AWSSEARCH_TAG_COLUMNS``. Returns a comma separated string or None.
    """
    for name in (f"{ENV_PREFIX}_{kind.upper()}_TAG_COLUMNS", f"{ENV_PREFIX}_TAG_COLUMNS"):
        value = os.environ.get(name)
        if split_csv(value):
            debug_print(f"Default tag columns from {name}: {value}")  # pragma: no mutate
            return value
    return None
