from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """Application settings."""

    # MySQL
    db_host: str = Field(default="localhost", validation_alias="MYSQLHOST")
    db_port: int = Field(default=3306, validation_alias="MYSQLPORT")
    db_name: str = Field(default="4537_lab4", validation_alias="MYSQLDATABASE")
    db_driver: str = Field(default="mysql+aiomysql", validation_alias="DB_DRIVER")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    verify_on_startup: bool = Field(default=True, validation_alias="DB_VERIFY_ON_STARTUP")

    # Admin role: create table + insert
    admin_user: str = Field(default="admin", validation_alias="MYSQL_ADMIN_USER")
    admin_password: str = Field(default="admin_password", validation_alias="MYSQL_ADMIN_PASSWORD")

    # Guest role: select only
    guest_user: str = Field(default="guest", validation_alias="MYSQL_GUEST_USER")
    guest_password: str = Field(default="guest_password", validation_alias="MYSQL_GUEST_PASSWORD")

    # Full URL overrides, e.g. sqlite+aiosqlite:///./gateway.db
    admin_database_url: str = Field(default="", validation_alias="ADMIN_DATABASE_URL")
    guest_database_url: str = Field(default="", validation_alias="GUEST_DATABASE_URL")

    # HTTP
    port: int = Field(default=3000, validation_alias="PORT")
    allowed_origin: str = Field(
        default="https://illustrious-bubblegum-77febb.netlify.app",
        validation_alias="ALLOWED_ORIGIN",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True
        frozen = True
        extra = "ignore"

    def admin_url(self) -> URL:
        return self._role_url(self.admin_database_url, self.admin_user, self.admin_password)

    def guest_url(self) -> URL:
        return self._role_url(self.guest_database_url, self.guest_user, self.guest_password)

    def _role_url(self, override: str, user: str, password: str) -> URL:
        if override:
            return make_url(override)
        return URL.create(
            self.db_driver,
            username=user,
            password=password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
