import hashlib
from functools import wraps

from dateutil import tz

DEFAULT_SETTINGS = {
    # Zone the base date is read in and produced dates are returned in.
    # "local" uses the machine's zone.
    "TIMEZONE": "Asia/Seoul",
    # False returns naive wall-clock datetimes in TIMEZONE.
    "RETURN_AS_TIMEZONE_AWARE": True,
    # Passed to dateparser for text without Korean.
    "PREFER_DATES_FROM": "future",
    "LANGUAGES": None,
}


class Settings:
    """Control and configure default parsing behavior of datekompiler.
    Currently, supported settings are:

    * `TIMEZONE`
    * `RETURN_AS_TIMEZONE_AWARE`
    * `PREFER_DATES_FROM`
    * `LANGUAGES`
    """

    _default = True
    _cache = dict()

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(DEFAULT_SETTINGS.items())

    @classmethod
    def get_key(cls, settings=None):
        if not settings:
            return "default"

        keys = sorted(["%s-%s" % (key, str(settings[key])) for key in settings])
        return hashlib.md5("".join(keys).encode("utf-8")).hexdigest()

    def __new__(cls, *args, **kw):
        key = cls.get_key(*args, **kw)
        if key not in cls._cache:
            cls._cache[key] = super().__new__(cls)
        return cls._cache[key]

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for key in DEFAULT_SETTINGS:
            kwds.setdefault(key, getattr(self, key))

        kwds["_default"] = False
        kwds["_mod_settings"] = dict(mod_settings or {})

        return self.__class__(settings=kwds)


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            check_settings(kwargs["settings"])
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


class SettingValidationError(ValueError):
    pass


def _check_timezone(setting_name, setting_value):
    if setting_value.lower() != "local" and tz.gettz(setting_value) is None:
        raise SettingValidationError(
            '"{}" is not a valid timezone for "{}"'.format(setting_value, setting_name)
        )


def _check_languages(setting_name, setting_value):
    if setting_value is not None and not all(isinstance(lang, str) for lang in setting_value):
        raise SettingValidationError(
            '"{}" must be a list of language codes'.format(setting_name)
        )


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "TIMEZONE": {
            "type": str,
            "extra_check": _check_timezone,
        },
        "RETURN_AS_TIMEZONE_AWARE": {
            "type": bool,
        },
        "PREFER_DATES_FROM": {
            "values": ("current_period", "past", "future"),
            "type": str,
        },
        "LANGUAGES": {
            "type": (list, tuple, type(None)),
            "extra_check": _check_languages,
        },
    }

    for setting_name, setting_value in settings.items():
        if setting_name not in settings_values:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

        setting_type = settings_values[setting_name]["type"]
        if not isinstance(setting_value, setting_type):
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_type, type(setting_value).__name__
                )
            )

        setting_allowed_values = settings_values[setting_name].get("values")
        if setting_allowed_values and setting_value not in setting_allowed_values:
            raise SettingValidationError(
                '"{}" is not a valid value for "{}", it should be: "{}"'.format(
                    setting_value,
                    setting_name,
                    '" or "'.join(setting_allowed_values),
                )
            )

        extra_check = settings_values[setting_name].get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
