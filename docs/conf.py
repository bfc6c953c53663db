# Configuration file for the Sphinx documentation builder.
#
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# Add project to path for autodoc
sys.path.insert(0, os.path.abspath(".."))

# Setup Django before importing models
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "example.project.settings")
import django
django.setup()

from orderman import __version__

# -- Project information -----------------------------------------------------

project = "Orderman"
copyright = "2025, Orderman Contributors"
author = "Orderman Contributors"
release = __version__
version = ".".join(__version__.split(".")[:2])

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx_copybutton",
    "sphinxcontrib.httpdomain",     # Endpoints REST
]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store", "*.md"]

master_doc = "index"

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

html_theme_options = {
    "sidebar_hide_name": False,
    "navigation_with_keys": True,
}

html_title = "Orderman"
html_short_title = "Orderman"

# -- Options for autodoc -----------------------------------------------------

autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
    "member-order": "bysource",
}

autodoc_typehints = "description"

# -- Options for intersphinx -------------------------------------------------

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "django": (
        "https://docs.djangoproject.com/en/5.1/",
        "https://docs.djangoproject.com/en/5.1/objects.inv",
    ),
}

# -- Options for Napoleon ----------------------------------------------------

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_use_param = True
napoleon_use_rtype = True
