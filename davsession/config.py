import json
import logging
import os
from typing import Any
from typing import Dict
from typing import Optional

from davsession.session import DAVSession

"""
Connection parameters may come from the caller, from environment
variables prepended with ``DAVSESSION_`` or from a configuration
file in JSON (or YAML, if pyyaml is installed).

A configuration file holds named sections, a section may inherit
another one::

    {
      "default": {"davsession_url": "https://dav.example.com/",
                  "davsession_user": "me", "davsession_pass": "secret"},
      "photos": {"inherits": "default",
                 "davsession_url": "https://dav.example.com/photos/"}
    }
"""

log = logging.getLogger("davsession")

## Keys accepted by DAVSession(...) from configuration sources
CONNKEYS = set(
    (
        "url",
        "proxy",
        "username",
        "password",
        "timeout",
        "headers",
        "huge_tree",
        "ssl_verify_cert",
        "ssl_cert",
        "user_agent",
        "depth",
        "lock_owner",
    )
)

## Environment variables that are not connection parameters
_NON_CONN_ENV = (
    "DAVSESSION_CONFIG_FILE",
    "DAVSESSION_CONFIG_SECTION",
    "DAVSESSION_DEBUGMODE",
    "DAVSESSION_COMMDUMP",
)


def config_section(config: Dict[str, Any], section: str = "default") -> Dict[str, Any]:
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


def read_config(fn: Optional[str]) -> Optional[Dict[str, Any]]:
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config"
        for config_file in (
            f"{cfgdir}/davsession/config.json",
            f"{cfgdir}/davsession/config.yaml",
            "/etc/davsession/config.json",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        with open(fn, "rb") as config_file:
            return json.load(config_file)
    except FileNotFoundError:
        log.info("no config file found at %s", fn)
    except json.decoder.JSONDecodeError:
        ## yaml is an optional external module
        try:
            import yaml
        except ImportError:
            log.error(
                f"config file {fn} exists but is not valid json, and pyyaml is not installed."
            )
            return {}
        try:
            with open(fn, "rb") as config_file:
                return yaml.safe_load(config_file)
        except yaml.YAMLError:
            log.error(
                f"config file {fn} exists but is neither valid json nor yaml.  Check the syntax."
            )
    return {}


def _coerce(key: str, value: Any) -> Any:
    if key == "timeout" and isinstance(value, str):
        return float(value)
    if key in ("huge_tree",) and isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    if key == "ssl_verify_cert" and isinstance(value, str):
        if value.lower() in ("0", "false", "no"):
            return False
        if value.lower() in ("1", "true", "yes"):
            return True
    return value


def _conn_params(raw: Dict[str, Any]) -> Dict[str, Any]:
    params = {}
    for key, value in raw.items():
        if key == "pass":
            key = "password"
        if key == "user":
            key = "username"
        if key not in CONNKEYS:
            log.warning("ignoring unknown connection parameter %s", key)
            continue
        params[key] = _coerce(key, value)
    return params


def get_davsession(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section_name: Optional[str] = None,
    environment: bool = True,
    **config_data,
) -> Optional[DAVSession]:
    """
    Returns a DAVSession object, without talking to the server.  The
    connection parameters are looked up in this order:

    * The keyword parameters given
    * Environment variables prepended with `DAVSESSION_`, like
      `DAVSESSION_URL`, `DAVSESSION_USERNAME`, `DAVSESSION_PASSWORD`.
      `DAVSESSION_CONFIG_FILE` and `DAVSESSION_CONFIG_SECTION` select
      the configuration file and section.
    * The configuration file, keys prepended with `davsession_`.

    Returns None if no connection parameters were found.
    """
    if config_data:
        return DAVSession(**_conn_params(config_data))

    if environment:
        conf = {}
        for env_key in os.environ:
            if env_key.startswith("DAVSESSION_") and env_key not in _NON_CONN_ENV:
                conf[env_key[len("DAVSESSION_") :].lower()] = os.environ[env_key]
        if conf:
            return DAVSession(**_conn_params(conf))
        if not config_file:
            config_file = os.environ.get("DAVSESSION_CONFIG_FILE")
        if not config_section_name:
            config_section_name = os.environ.get("DAVSESSION_CONFIG_SECTION")

    if check_config_file:
        cfg = read_config(config_file)
        if cfg:
            section = config_section(cfg, config_section_name or "default")
            conn_params = {}
            for k in section:
                if k.startswith("davsession_") and section[k]:
                    conn_params[k[len("davsession_") :]] = section[k]
            if conn_params:
                return DAVSession(**_conn_params(conn_params))
    return None
