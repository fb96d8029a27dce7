"""
blockdoc - Convert article HTML to checksummed JSON block documents and back.

Usage:
    from blockdoc import serialize, unserialize

    payload = serialize("<h1>Title</h1><p>Hello</p>")
    html = unserialize(payload)
"""

__version__ = "0.2.0"

from .conversion import BlocksToHtml, FragmentExtractor, HtmlToBlocks
from .errors import BlockdocError, MalformedInputError, ResourceExhaustedError
from .models.blocks import BLOCK_TYPES, COLUMNS_COUNT, Block
from .models.config import BlockdocConfig, SerializeConfig
from .models.document import VERSION, BlockDocument
from .serializer import ArticleSerializer, serialize, unserialize, verify

__all__ = [
    "__version__",
    # Core
    "ArticleSerializer",
    "serialize",
    "unserialize",
    "verify",
    # Conversion
    "HtmlToBlocks",
    "BlocksToHtml",
    "FragmentExtractor",
    # Models
    "Block",
    "BlockDocument",
    "BLOCK_TYPES",
    "COLUMNS_COUNT",
    "VERSION",
    # Config
    "BlockdocConfig",
    "SerializeConfig",
    # Errors
    "BlockdocError",
    "MalformedInputError",
    "ResourceExhaustedError",
]
