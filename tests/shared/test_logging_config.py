# -*- coding: utf-8 -*-
import json
import logging

from pythonjsonlogger.json import JsonFormatter

from storefront.shared.config.logging_config import build_logging_config


def test_plain_config_quiets_noisy_libraries():
    config = build_logging_config("debug", "plain")

    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["httpx"] == {"level": "WARNING"}
    assert "()" not in config["formatters"]["default"]


def test_json_formatter_carries_static_fields():
    formatter_config = build_logging_config("INFO", "json", {"service": "Storefront", "env": "test"})["formatters"]["default"]
    formatter = JsonFormatter(
        formatter_config["format"],
        rename_fields=formatter_config["rename_fields"],
        static_fields=formatter_config["static_fields"],
    )

    record = logging.LogRecord("storefront.payments", logging.WARNING, __file__, 1, "firma inválida", None, None)
    payload = json.loads(formatter.format(record))

    assert payload["message"] == "firma inválida"
    assert payload["level"] == "WARNING"
    assert payload["service"] == "Storefront"
    assert payload["env"] == "test"
