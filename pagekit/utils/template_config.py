"""
Centralized template configuration for pagekit.
"""

import os
from fastapi.templating import Jinja2Templates

PACKAGE_DIR = os.path.dirname(os.path.dirname(__file__))
TEMPLATES_DIR = os.path.join(PACKAGE_DIR, "templates")


def get_templates(directory: str = TEMPLATES_DIR) -> Jinja2Templates:
    """
    Get a Jinja2 templates instance with pagekit filters registered.

    Applications with their own templates directory can pass it here and
    still extend "pagekit/pagination.html".
    """
    templates = Jinja2Templates(directory=directory)
    from pagekit.utils.template_filters import register_filters

    register_filters(templates)
    return templates


templates = get_templates()
