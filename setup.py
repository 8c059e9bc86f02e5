import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="dmmf_to_strawberry",
    version="0.1.0",
    description="Generate a Strawberry GraphQL API backed by Prisma Client Python from a Prisma DMMF document",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Intended Audience :: Developers",
    ],
    keywords="prisma dmmf graphql strawberry code generation resolvers",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "inflect>=7.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "strawberry-graphql>=0.240.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dmmf_to_strawberry=dmmf_to_strawberry.dmmf_to_strawberry:dmmf_to_strawberry",
            "dmmf_to_strawberry_benchmark=dmmf_to_strawberry.benchmark:benchmark",
        ],
    },
    include_package_data=True,
    package_data={
        "dmmf_to_strawberry": ["templates/*.jinja2"],
    },
    zip_safe=False,
)
