import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))
readme_path = os.path.join(here, "README.md")

setup(
    name="quickq",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "aiohttp>=3.8.0",
        "aiosqlite>=0.17.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.15.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=0.19.0",
        "structlog>=21.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
        ],
    },
    python_requires=">=3.9",
    author="Christo Strydom",
    author_email="christo.strydom@gmail.com",
    description="Session core for AI-driven mock interviews and job search",
    long_description=open(readme_path).read() if os.path.exists(readme_path) else "",
    long_description_content_type="text/markdown",
    entry_points={
        "console_scripts": [
            "quickq-api=quickq.services.session_api.main:main",
        ],
    },
)
