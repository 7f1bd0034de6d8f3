"""Setup configuration for cart-store project."""

from setuptools import setup, find_packages

setup(
    name="cart-store",
    version="1.0.0",
    description="Shopping cart state container with Redis or file persistence and a FastAPI surface",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "redis>=5.0.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.25",
        ],
    },
    entry_points={
        "console_scripts": [
            "cart-service=cart_store.service.main:main",
            "view-cart=cart_store.view_cart:main",
        ],
    },
)
