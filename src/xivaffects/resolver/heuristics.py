"""
Fallback categories for paths the grammar does not recognise.
"""

from typing import Optional

ROOT_CATEGORIES = {
    "bg": "World",
    "bgcommon": "World",
    "vfx": "VFX",
    "ui": "Interface",
    "shader": "Shader",
}


def categorise(path: str) -> Optional[str]:
    """
    Coarse category from the file extension and root folder, or None.

    Sound files are recognised by extension wherever they live.
    """
    if path.endswith(".scd"):
        return "Sound"
    root = path.split("/", 1)[0]
    return ROOT_CATEGORIES.get(root)
