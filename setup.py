# setup.py

from setuptools import setup, find_packages

setup(
    name="mock-market-data",
    version="0.1.0",
    packages=find_packages(include=['src', 'src.*', 'utils']),
    package_data={'src': ['fixtures/*.json']},
    install_requires=[
        'pandas',
        'numpy',
        'python-dotenv',
        'fastapi',
        'uvicorn',
        'aiohttp'
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'httpx'
        ]
    },
    entry_points={
        'console_scripts': [
            'mock-market-api=src.api.server:main',
            'mock-market-load=utils.load_test:main',
        ]
    },
    python_requires='>=3.8',
    author="Your Name",
    author_email="your.email@example.com",
    description="Mock market data API and client for development, testing and load generation",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
)
