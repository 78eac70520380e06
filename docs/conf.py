# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

project = 'flughafen'
release = '0.1.0'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
    'sphinx.ext.napoleon',
    'sphinx.ext.autosummary',
]

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# -- Options for HTML output -------------------------------------------------

html_theme = 'alabaster'
html_static_path = ['_static']

# -- Autodoc configuration --------------------------------------------------
autodoc_default_options = {
    'members': True,
    'show-inheritance': True,
    'member-order': 'bysource',
}

# Builder docstrings carry the usage examples, so keep signatures short
autodoc_typehints = 'description'
python_use_unqualified_type_names = True  # WorkflowBuilder instead of flughafen.building.workflow_builder.WorkflowBuilder

autosummary_generate = True
autosummary_generate_overwrite = True

# Path to Python source
import os
import sys

sys.path.insert(0, os.path.abspath('..'))
