import unifi_api_client
import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath('..'))

project = 'unifi-api-client'
copyright = f'{datetime.now().year}, unifi-api-client contributors'
author = 'unifi-api-client contributors'

release = unifi_api_client.__version__

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.viewcode',
    'sphinx.ext.napoleon',         # Google style docstrings
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

autosummary_generate = True
autodoc_member_order = 'bysource'
autoclass_content = 'both'
autodoc_typehints = 'description'

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store', '_autosummary']

templates_path = ['_templates']
html_theme = 'sphinx_rtd_theme'
html_title = f"{project} Documentation"

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'requests': ('https://requests.readthedocs.io/en/latest/', None),
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_use_param = True
napoleon_use_rtype = True
