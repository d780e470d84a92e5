from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "SEO Meta Auditor"
    app_version: str = "0.6.0"
    debug: bool = False
    environment: str = "development"

    # Host database settings
    database_url: str = "sqlite+aiosqlite:///./cms.db"

    # Security settings
    secret_key: str = "your_secret_key"

    # Option storage (post type preference lives here)
    settings_file: str = "data/site_options.json"
    default_post_types: list[str] = ["page"]

    # Host plugin storage
    plugins_config_file: str = "data/plugins_config.json"
    plugins_dir: str = "data/plugins"

    # Plugin directory and the import plugin offered by the helper
    plugin_directory_url: str = "https://api.wordpress.org/plugins/info/1.2/"
    plugin_directory_timeout: float = 30.0
    importer_slug: str = "wp-all-import"
    importer_name: str = "WP All Import"
    importer_new_import_url: str = "/admin/imports/new"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
