"""Sphinx configuration."""

project = "geoWhizz"
author = "geoWhizz developers"
copyright = "2025, geoWhizz developers"  # noqa: A001

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinxcontrib.autodoc_pydantic",
    "sphinx_typer",
    "sphinx_copybutton",
    "myst_parser",
]

exclude_patterns = ["_build"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "xarray": ("https://docs.xarray.dev/en/stable/", None),
    "zarr": ("https://zarr.readthedocs.io/en/stable/", None),
}

html_theme = "furo"

# Models are documented field by field, skip the config and validator blocks
autodoc_typehints = "description"
autodoc_member_order = "bysource"
autodoc_pydantic_model_show_json = False
autodoc_pydantic_model_show_config_summary = False
autodoc_pydantic_model_show_validator_summary = False

myst_enable_extensions = ["colon_fence"]

copybutton_prompt_text = r"\$ |>>> "
copybutton_prompt_is_regexp = True
