from setuptools import find_packages, setup

setup(
    name="sundae-dynamo",
    version="0.1.0",
    packages=find_packages(include=["sundae_dynamo", "sundae_dynamo.*"]),
    python_requires=">=3.10",
    install_requires=["boto3>=1.26.0"],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "pytest-cov",
            "moto",
            "freezegun",
        ]
    },
)
