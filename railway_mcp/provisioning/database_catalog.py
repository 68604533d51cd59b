"""Built-in database images that can be provisioned without a template."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..errors import UnsupportedDatabaseType
from ..models import ResolvedService
from .template_resolver import DEFAULT_MOUNT_PATH


class DatabaseType(str, Enum):
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    REDIS = "redis"
    MINIO = "minio"
    SQLITE3 = "sqlite3"
    POCKETBASE = "pocketbase"
    CLICKHOUSE = "clickhouse"
    MARIADB = "mariadb"
    PGVECTOR = "pgvector"


@dataclass(frozen=True)
class DatabaseConfig:
    """Static configuration for one built-in database type.

    ``port`` is the application port to expose through a TCP proxy; entries
    without one are created without public networking.
    """

    source: str
    default_name: str
    description: str
    category: str
    variables: dict[str, str] = field(default_factory=dict)
    port: Optional[int] = None
    mount_path: Optional[str] = None


DATABASE_CONFIGS: dict[DatabaseType, DatabaseConfig] = {
    DatabaseType.POSTGRES: DatabaseConfig(
        source="railwayapp-templates/postgres-ssl:15",
        default_name="PostgreSQL",
        description="PostgreSQL database service",
        category="SQL Databases",
        variables={
            "POSTGRES_URL": "jdbc:postgresql://${{POSTGRESUSER}}:${{POSTGRESPASSWORD}}@${{RAILWAY_TCP_PROXY_DOMAIN}}:${{RAILWAY_TCP_PROXY_PORT}}/${{POSTGRESDB}}",
            "POSTGRESUSER": "postgres-user",
            "POSTGRESPASSWORD": "postgres-password",
            "POSTGRESDB": "postgres-db",
        },
        port=5432,
        mount_path="/var/lib/postgresql/data",
    ),
    DatabaseType.MYSQL: DatabaseConfig(
        source="mysql:latest",
        default_name="MySQL",
        description="MySQL database service",
        category="SQL Databases",
        variables={
            "MYSQL_PUBLIC_URL": "mysql://${{MYSQLUSER}}:${{MYSQL_ROOT_PASSWORD}}@${{RAILWAY_TCP_PROXY_DOMAIN}}:${{RAILWAY_TCP_PROXY_PORT}}/${{MYSQL_DATABASE}}",
            "MYSQL_URL": "mysql://${{MYSQLUSER}}:${{MYSQL_ROOT_PASSWORD}}@${{RAILWAY_PRIVATE_DOMAIN}}:3306/${{MYSQL_DATABASE}}",
            "MYSQLHOST": "${{RAILWAY_PRIVATE_DOMAIN}}",
            "MYSQLPORT": "3306",
            "MYSQLUSER": "root",
            "MYSQLPASSWORD": "mysql-password",
            "MYSQLDATABASE": "mysql-db",
            "MYSQL_ROOT_PASSWORD": "mysql-password",
        },
        port=3306,
        mount_path="/var/lib/mysql",
    ),
    DatabaseType.MONGODB: DatabaseConfig(
        source="mongo:6",
        default_name="MongoDB",
        description="MongoDB NoSQL database service",
        category="NoSQL Databases",
        port=27017,
        mount_path="/data/db",
    ),
    DatabaseType.REDIS: DatabaseConfig(
        source="redis:7",
        default_name="Redis",
        description="Redis in-memory data store",
        category="In-Memory Stores",
        port=6379,
    ),
    DatabaseType.MINIO: DatabaseConfig(
        source="minio:latest",
        default_name="MinIO",
        description="MinIO object storage service",
        category="Object Storage",
        port=9000,
    ),
    DatabaseType.SQLITE3: DatabaseConfig(
        source="sqlite:latest",
        default_name="SQLite",
        description="SQLite relational database",
        category="SQL Databases",
    ),
    DatabaseType.POCKETBASE: DatabaseConfig(
        source="pocketbase/pocketbase:latest",
        default_name="PocketBase",
        description="PocketBase lightweight, open-source, self-hosted backend",
        category="SQL Databases",
        mount_path="/pb_data",
    ),
    DatabaseType.CLICKHOUSE: DatabaseConfig(
        source="clickhouse/clickhouse-server:23",
        default_name="ClickHouse",
        description="ClickHouse column-oriented database",
        category="Analytics Databases",
        port=8123,
        mount_path="/var/lib/clickhouse",
    ),
    DatabaseType.MARIADB: DatabaseConfig(
        source="mariadb:10",
        default_name="MariaDB",
        description="MariaDB relational database",
        category="SQL Databases",
        port=3306,
        mount_path="/var/lib/mysql",
    ),
    DatabaseType.PGVECTOR: DatabaseConfig(
        source="postgres:14",
        default_name="PGVector",
        description="PGVector vector database",
        category="Vector Databases",
        port=5432,
        mount_path="/var/lib/postgresql/data",
    ),
}


def get_database_config(database_type: Union[DatabaseType, str]) -> tuple[DatabaseType, DatabaseConfig]:
    try:
        key = DatabaseType(database_type)
    except ValueError:
        raise UnsupportedDatabaseType(str(database_type)) from None
    return key, DATABASE_CONFIGS[key]


def resolve_database(database_type: Union[DatabaseType, str]) -> ResolvedService:
    """Build the provisioning input for a built-in database type."""
    key, config = get_database_config(database_type)
    return ResolvedService(
        source_id=key.value,
        slot=key.value,
        image=config.source,
        default_name=config.default_name,
        variables=dict(config.variables),
        application_port=config.port,
        mount_path=config.mount_path or DEFAULT_MOUNT_PATH,
    )


def list_database_types() -> dict[str, list[dict[str, str]]]:
    """Group the built-in catalog by category."""
    categorized: dict[str, list[dict[str, str]]] = {}
    for database_type, config in DATABASE_CONFIGS.items():
        categorized.setdefault(config.category, []).append(
            {
                "type": database_type.value,
                "name": config.default_name,
                "description": config.description,
                "image": config.source,
            }
        )
    return categorized
