"""Configuration management for Tally.

Reads configuration from ~/.config/tally.toml and creates default config if needed.
"""

import secrets
from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    db_timeout: float
    log_level: str
    log_dir: Path
    server_host: str
    server_port: int
    jwt_secret_key: str
    token_expires_minutes: int = 60

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values.

        A fresh random JWT secret is generated each time; it is persisted
        when the default config is written to disk.
        """
        home = Path.home()
        base_dir = home / "data" / "tally"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="tally.db",
            db_timeout=5.0,
            log_level="INFO",
            log_dir=base_dir / "logs",
            server_host="127.0.0.1",
            server_port=8000,
            jwt_secret_key=secrets.token_hex(32),
            token_expires_minutes=60,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tally.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    defaults = Config.default()

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", defaults.base_dir))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", defaults.db_filename)
    db_timeout = float(db_config.get("timeout", defaults.db_timeout))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", defaults.log_level)
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    server_config = data.get("server", {})
    server_host = server_config.get("host", defaults.server_host)
    server_port = int(server_config.get("port", defaults.server_port))

    auth_config = data.get("auth", {})
    jwt_secret_key = auth_config.get("jwt_secret_key")
    if not jwt_secret_key:
        raise ValueError(f"auth.jwt_secret_key is not set in {config_path}")
    token_expires_minutes = int(
        auth_config.get("token_expires_minutes", defaults.token_expires_minutes)
    )

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        db_timeout=db_timeout,
        log_level=log_level,
        log_dir=log_dir,
        server_host=server_host,
        server_port=server_port,
        jwt_secret_key=jwt_secret_key,
        token_expires_minutes=token_expires_minutes,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
            "timeout": config.db_timeout,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "server": {
            "host": config.server_host,
            "port": config.server_port,
        },
        "auth": {
            "jwt_secret_key": config.jwt_secret_key,
            "token_expires_minutes": config.token_expires_minutes,
        },
    }

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
