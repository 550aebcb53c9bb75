"""Example startup routine: load settings, fail fast on missing values, dump config."""

import logging
import pathlib

from pydantic import BaseModel

from strictconf import Configuration, environ_layer, get_string, get_string_strict, get_value_strict, log_all

CONFIG_PATH = pathlib.Path(__file__).with_name("app.yaml")


class DatabaseSettings(BaseModel):
    """Connection settings bound from the Database section."""

    Host: str
    Port: int
    Ssl: bool = False


def build_configuration(environ=None) -> Configuration:
    """Layer APP_-prefixed environment variables over app.yaml."""
    return Configuration.load(str(CONFIG_PATH), environ_layer("APP_", environ))


def startup(configuration: Configuration, logger: logging.Logger) -> dict:
    log_all(configuration, logger)
    return {
        "service": get_string_strict(configuration, "Service:Name"),
        "database": get_value_strict(configuration, "Database", DatabaseSettings),
        "replicas": get_value_strict(configuration, "Service:Replicas", list[str]),
        "region": get_string(configuration, "Service:Region"),
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    print(startup(build_configuration(), logging.getLogger("startup")))
