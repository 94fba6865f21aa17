from django import template

from utils import utils

register = template.Library()


@register.filter
def inline_markdown(value):
    """Render `[text](url)`, `*em*` and backticks as safe HTML."""
    return utils.render_inline_markdown(value)
