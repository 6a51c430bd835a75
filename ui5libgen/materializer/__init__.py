"""Template materializer -- emits a renamed, substituted copy of a template tree.

Quick usage::

    from ui5libgen.materializer import TemplateMaterializer

    materializer = TemplateMaterializer()
    written = await materializer.materialize(library.template_context(), "/tmp/out")
"""

from ui5libgen.materializer.generator import MaterializeError, TemplateMaterializer, is_binary
from ui5libgen.materializer.renaming import (
    LIBRARY_TOKEN,
    build_rename_rules,
    rename,
    replace_library_token,
    strip_filename_underscore,
    strip_segment_underscore,
)

__all__ = [
    "LIBRARY_TOKEN",
    "MaterializeError",
    "TemplateMaterializer",
    "build_rename_rules",
    "is_binary",
    "rename",
    "replace_library_token",
    "strip_filename_underscore",
    "strip_segment_underscore",
]
