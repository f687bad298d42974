"""
NuGet Dependants

Find every NuGet package that depends on a given package and list them in Markdown.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
