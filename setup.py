# setup.py
from setuptools import find_packages, setup

setup(
    name="reservation-admin",
    version="0.1.0",
    packages=find_packages(include=["reservation_admin", "reservation_admin.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.27",
        "pydantic>=2.6",
        "pydantic-settings>=2.2",
        "email-validator>=2.1",
        "structlog>=24.1",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "fastapi>=0.110",
            "python-multipart>=0.0.9",
        ],
    },
    entry_points={
        "console_scripts": [
            "reservation-admin=reservation_admin.cli:main",
        ],
    },
)
