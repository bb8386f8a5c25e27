"""Move and copy that refuse to replace an existing destination.

Both raise ``FileExistsError`` when something already sits at ``dest``,
including a file created there after the target name was chosen.
"""
from __future__ import annotations

import os
import shutil


def copy_no_clobber(src: str, dest: str) -> None:
    with open(src, "rb") as fsrc:
        # "x" fails if dest exists, atomically with its creation
        with open(dest, "xb") as fdst:
            try:
                shutil.copyfileobj(fsrc, fdst)
            except BaseException:
                fdst.close()
                os.remove(dest)
                raise
    shutil.copystat(src, dest)


def move_no_clobber(src: str, dest: str) -> None:
    """Hard-link ``src`` at ``dest`` then unlink ``src``.

    Falls back to an exclusive copy followed by a delete when hard links are
    not possible (another device, or a filesystem without link support).
    """
    try:
        os.link(src, dest)
    except FileExistsError:
        raise
    except OSError:
        copy_no_clobber(src, dest)
    os.remove(src)
