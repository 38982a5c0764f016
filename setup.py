from setuptools import setup, find_packages

setup(
    name="portfolio-manager",
    version="1.0.0",
    description="Portfolio project manager - CRUD, add/edit form and featured views",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        # Core data modeling and validation
        "pydantic>=2.0.0",

        # Environment variables
        "python-dotenv>=1.0.0",

        # CLI and rich output
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "portfolio = portfolio.app.main:main",
        ],
    },
    python_requires=">=3.11",
)
