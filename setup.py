"""
Setup script for snapboard: turn whiteboard photos into Miro boards
"""

from setuptools import setup, find_packages

setup(
    name="snapboard",
    version="1.0.0",
    description="Convert whiteboard photos into structured Miro boards with vision models",
    long_description="Analyzes a photographed whiteboard with a vision model (Gemini or Claude) and recreates its shapes, text, sticky notes and connectors on a new Miro board",
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["tests*", "docs*", "examples*"]),
    python_requires=">=3.9",
    install_requires=[
        # API
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "python-multipart>=0.0.9",
        
        # Configuration and models
        "pydantic>=2.7.0",
        "pydantic-settings>=2.2.0",
        "python-dotenv>=1.0.0",
        
        # Vision backends
        "google-generativeai>=0.8.5",
        "google-api-core>=2.15.0",
        "anthropic>=0.34.0",
        
        # Board service
        "requests>=2.31.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.25.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "mypy>=1.0.0",
            "flake8>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "snapboard=snapboard.__main__:main",
        ],
    },
    include_package_data=True,
    author="snapboard Team",
    license="MIT",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Graphics :: Capture",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="whiteboard vision miro diagram gemini claude",
)
