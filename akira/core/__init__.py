from .conf import settings, get_settings, Settings
