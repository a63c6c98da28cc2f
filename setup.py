from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="py-evm-rpc",
    package_dir={"": "src"},
    packages=find_packages("src"),
    version="1.0.0",
    description="Pretty simple and fully asynchronous client for a single EVM JSON-RPC node",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.9",
    install_requires=["aiohttp", "loguru", "pydantic>=2.5", "eth-utils>=2", "eth-hash[pycryptodome]"],
    extras_require={"test": ["pytest", "pytest-asyncio"]},
)
