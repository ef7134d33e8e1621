import os

from setuptools import find_packages, setup


# read the version from the VERSION file
def get_version():
    with open(os.path.join(os.path.dirname(__file__), "VERSION"), "r") as version_file:
        return version_file.read().strip()


# Set the version in the adoprovider/version.py file
def set_version_constant(version: str):
    with open(
        os.path.join(os.path.dirname(__file__), "adoprovider", "version.py"), "w"
    ) as version_file:
        version_file.write(f'__version__ = "{version}"\n')


VERSION = get_version()
set_version_constant(VERSION)

setup(
    name="adoprovider",
    version=VERSION,
    description="Reconciles declared Azure DevOps projects against the live Azure DevOps service",
    python_requires=">=3.10",
    packages=find_packages(include=["adoprovider", "adoprovider.*"]),
    install_requires=[
        "plux>=1.3",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "adoprovider.resource_providers": [
            "AzureDevOps::Core::Project = "
            "adoprovider.services.project.provider_plugin:ProjectResourceProviderPlugin",
        ],
    },
)
