"""
Keychain access for IP Updater.

The email API key is stored as a generic password in the login keychain and
read with the `security` command-line tool. Writing it is the settings
panel's job, not the agent's.
"""

from ..errors import SecretLookupError
from ..logging_config import get_logger
from ..utils import run_command

# Get module logger
logger = get_logger(__name__)


class KeychainSecretStore:
    """Resolves a SecretReference to the stored secret string."""

    def get_secret(self, reference):
        """
        Return the secret for reference.service / reference.account.

        Raises:
            SecretLookupError: no such item, access denied, or empty secret
        """
        logger.debug(
            f"Looking up keychain item service={reference.service} account={reference.account}"
        )
        secret = run_command(
            [
                "security",
                "find-generic-password",
                "-s",
                reference.service,
                "-a",
                reference.account,
                "-w",
            ],
            capture=True,
            quiet_on_error=True,
            log_output=False,
        )
        if not secret:
            raise SecretLookupError(
                f"No keychain item for service={reference.service} account={reference.account}"
            )
        return secret
