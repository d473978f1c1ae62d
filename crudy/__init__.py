"""crudy -- scaffolds CRUD application skeletons from Jinja2 templates."""

__version__ = "0.1.0"
