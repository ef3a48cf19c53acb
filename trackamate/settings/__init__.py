"""Budget section settings and loaders.

Default amounts live in ``budgets.json`` so they can be changed without
code changes.
"""

from .defaults import SectionSettings, get_config_value, load_budget_settings, load_config

__all__ = ['SectionSettings', 'get_config_value', 'load_budget_settings', 'load_config']
