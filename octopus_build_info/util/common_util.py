import os
import re
from pathlib import Path

from octopus_build_info.constants import TAG_REF_PREFIX

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def get_root_path():
    project_root = Path(os.environ.get("PROJECT_ROOT", ".")).resolve()
    return project_root


def sanitize_package_id(package_id: str) -> str:
    """Replace anything outside [A-Za-z0-9_.-] so the id can be used in a file name."""
    return UNSAFE_FILENAME_CHARS.sub("_", package_id)


def normalize_version(raw_version, version_tag_prefix=None):
    """Normalize a tag ref or a bare version string to the bare version.

    'refs/tags/v2.0.0' and ' v2.0.0 ' both become '2.0.0' with prefix 'v'.
    """
    if raw_version is None:
        return None
    version = raw_version.strip()
    if version.startswith(TAG_REF_PREFIX):
        version = version[len(TAG_REF_PREFIX):]
    if version_tag_prefix and version.startswith(version_tag_prefix):
        version = version[len(version_tag_prefix):]
    return version


def split_package_ids(value):
    """Split a whitespace separated list into distinct ids, keeping the given order."""
    if not value:
        return ()
    return tuple(dict.fromkeys(value.split()))
