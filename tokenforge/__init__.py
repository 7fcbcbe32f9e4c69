"""TokenForge: design token build pipeline.

Reads a Tokens Studio style token document and generates web, iOS and
Android artifacts from it.
"""

from tokenforge.core.constants import TOKENFORGE_VERSION

__version__ = TOKENFORGE_VERSION
