from setuptools import setup, find_namespace_packages

from src import __version__

setup(
    name="team-reports",
    version=__version__,
    description="Team report collection through a Telegram Mini App, mirrored to Google Sheets",
    author="Your Name",
    packages=find_namespace_packages(include=["src", "src.*", "cli", "cli.*"]),
    install_requires=[
        "click>=8.1.7",
        "fastapi>=0.109.0",
        "google-api-python-client>=2.100.0",
        "google-auth>=2.23.0",
        "httpx>=0.25.2",
        "psycopg2-binary>=2.9.9",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dateutil>=2.8.2",
        "python-dotenv>=1.0.0",
        "python-telegram-bot>=20.7",
        "rich>=13.7.0",
        "sqlalchemy>=2.0.23",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "team-reports-cli=cli.main:cli",
        ],
    },
    python_requires=">=3.10",
)
