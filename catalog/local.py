"""Enumerate the objects stored in a local storage directory."""

import logging
import os

from catalog.ordering import sort_ids
from validation.arguments import is_numeric
from validation.errors import LocalPathError

logger = logging.getLogger(__name__)


def is_object_name(name: str) -> bool:
    """True if a directory entry name is a stored object id.

    Objects are stored under their numeric id. Anything else in the directory
    (temp files such as ``10.tmp``, lock files, subdirectories with
    non-numeric names) is not an object.
    """
    return is_numeric(name)


def list_local_objects(path: str) -> list[str]:
    """List the object ids stored in ``path``.

    Names are kept verbatim ("007" stays "007") and naturally sorted.

    Raises:
        LocalPathError: path does not exist or is not a directory.
    """
    if not os.path.isdir(path):
        raise LocalPathError(f"Not a directory: {path}")

    names = os.listdir(path)
    logger.info(f"Found {len(names)} files")

    objects = [name for name in names if is_object_name(name)]
    skipped = len(names) - len(objects)
    if skipped:
        logger.debug(f"Skipped {skipped} non-object entries in {path}")

    return sort_ids(objects)
