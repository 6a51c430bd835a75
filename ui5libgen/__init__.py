"""UI5 library generator.

Scaffolds an OpenUI5/SAPUI5 library with web components enablement: asks a
few questions, validates the answers and writes a renamed, substituted copy
of the bundled template tree.

Quick usage::

    from ui5libgen.resolver import PromptSession
    from ui5libgen.materializer import TemplateMaterializer

    library = await PromptSession("./libs").run()
    await TemplateMaterializer().materialize(library.template_context(), library.destination)
"""

__version__ = "0.1.0"
