"""Folio — a markdown-to-HTML static site builder.

Turns a ``content/`` tree of markdown files into a ``build/`` tree of HTML
pages, all rendered through one ``templates/layout.html``.  Files in
``public/`` are copied across verbatim.

Quick start::

    import folio

    folio.build("my-site/")       # One-shot build
    folio.watch("my-site/")       # Build, then rebuild on every change

Command line::

    folio            # build the site in the current directory
    folio --watch    # build, then watch until Ctrl-C

"""

__version__ = "0.1.0"
__all__ = [
    "FolioConfig",
    "__version__",
    "build",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import folio`` fast; Jinja2, Markdown, and watchfiles load on
    first use.
    """
    if name == "FolioConfig":
        from folio.config import FolioConfig

        return FolioConfig

    if name == "build":
        from folio.app import build

        return build

    if name == "watch":
        from folio.app import watch

        return watch

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
