import os

from setuptools import setup, find_packages


def _read_file(path: str) -> str:
    with open(path) as f:
        return f.read().strip()


# Versions
file_dir = os.path.dirname(os.path.realpath(__file__))
chainlotto_version = _read_file(os.path.join(file_dir, 'chainlotto', 'VERSION'))
packages = find_packages()


setup(
    # Metadata
    name='chainlotto',
    version=chainlotto_version,
    license='MIT',
    description='Chainlotto is a client for deploying and interacting with lottery smart contracts on Ethereum compatible '
                'chains. It provides a contract client API with typed errors and scripts for the bundled lottery contracts.',

    # Dependencies
    python_requires='>=3.10,<4',
    install_requires=[
        'web3[tester]>=8,<9',
        'eth-utils>=5',
        'py-solc-x>=2,<3',
        'appdirs>=1.4,<1.5',
        'argcomplete>=3,<4',
        'semantic-version>=2.10,<3',
    ],
    extras_require={
        'test': [
            'parameterized>=0.9,<1',
            'pytest>=7',
        ],
    },

    # Contents
    packages=packages,
    package_data={
        'chainlotto': ['VERSION', 'contracts/*.sol'],
    },
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "chainlotto=chainlotto.__main__:main"
        ]
    }
)
