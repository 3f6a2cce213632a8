from setuptools import setup, find_packages

setup(
    name="academic-journey",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*", "alembic", "alembic.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        # passlib's bcrypt backend probe breaks on bcrypt 5
        "bcrypt>=4.0,<5",
        "pydantic[email]>=2.0",
        "email-validator>=2.0",
        "pydantic-settings",
        "python-dotenv",
        "alembic",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
