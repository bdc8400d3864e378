"""
This module defines pinned versions and is used internally to resolve the concrete solc version to use
"""
import os

from semantic_version import NpmSpec, Version

from chainlotto.errors.exceptions import SolcException


class Versions:
    CONTRACTS_SOLC_VERSION_COMPATIBILITY = NpmSpec('^0.8.0')
    DEFAULT_SOLC_VERSION = '0.8.19'
    SOLC_VERSION = None

    # Read chainlotto version from VERSION file
    with open(os.path.join(os.path.realpath(os.path.dirname(__file__)), 'VERSION')) as f:
        CHAINLOTTO_VERSION = f.read().strip()

    @staticmethod
    def _installed_compatible_versions():
        import solcx
        installed = [Version(str(v)) for v in solcx.get_installed_solc_versions()]
        return sorted(v for v in installed if Versions.CONTRACTS_SOLC_VERSION_COMPATIBILITY.match(v))

    @staticmethod
    def install_solc(version: str) -> Version:
        import solcx
        try:
            solcx.install_solc(version)
        except Exception as e:
            raise SolcException(f'Error while trying to install solc version {version}\n{e}') from e
        return Version(version)

    @staticmethod
    def set_solc_version(version: str) -> Version:
        """
        Select the solc version used for all subsequent compilations.

        :param version: concrete version string (e.g. v0.8.19) or 'latest'
        :raise ValueError: if version is not a valid version string or not compatible with the bundled contracts
        :raise SolcException: if the requested version is not installed and cannot be installed
        :return: the selected version
        """
        version = version[1:] if version.startswith('v') else version

        if version == 'latest':
            compatible = Versions._installed_compatible_versions()
            if compatible:
                v = compatible[-1]
            else:
                v = Versions.install_solc(Versions.DEFAULT_SOLC_VERSION)
        else:
            try:
                v = Version(version)
            except ValueError as e:
                raise ValueError(f'Invalid version string {version}\n{e}') from e
            if not Versions.CONTRACTS_SOLC_VERSION_COMPATIBILITY.match(v):
                raise ValueError(f'Only solc versions satisfying {Versions.CONTRACTS_SOLC_VERSION_COMPATIBILITY.expression} are supported')
            if v not in Versions._installed_compatible_versions():
                Versions.install_solc(str(v))

        Versions.SOLC_VERSION = v
        return v
