"""npm registry publisher.

Authenticates with an automation token written to the workspace .npmrc and
runs `npm publish`. A publish is never retried.
"""

from pathlib import Path

from autorelease import actions
from autorelease.exceptions import ConfigurationError, RegistryError
from autorelease.publishers.base import (
    PackageRegistryClient,
    PublishContext,
    PublishResult,
)
from autorelease.utils.shell import ShellError, is_command_available, run


def npmrc_line(registry: str, token: str) -> str:
    return f"//{registry}/:_authToken={token}"


class NPMClient(PackageRegistryClient):
    """PackageRegistryClient backed by the npm CLI."""

    def __init__(self, workspace: Path) -> None:
        self.workspace = workspace

    def _npm(self, *args: str) -> str:
        cmd = ["npm", *args]
        try:
            result = run(cmd, cwd=self.workspace)
        except ShellError as e:
            hint = None
            if not is_command_available("npm"):
                hint = "Install Node.js (actions/setup-node) before this step"
            raise RegistryError(
                f"npm command failed: {e.cmd}",
                details=f"Exit code: {e.returncode}\n{e.stderr or e.stdout}",
                fix_hint=hint,
            ) from e
        return result.stdout

    def write_credentials(self, registry: str, token: str) -> Path:
        npmrc = self.workspace / ".npmrc"
        try:
            npmrc.write_text(npmrc_line(registry, token), encoding="utf-8")
        except OSError as e:
            raise RegistryError(
                f"Failed to write {npmrc}",
                details=str(e),
            ) from e
        return npmrc

    def set_registry(self, url: str) -> None:
        self._npm("config", "set", "registry", url)

    def publish(self, access: str) -> str:
        return self._npm("publish", "--access", access)


class NPMPublisher:
    """Publishes the workspace package to the npm registry.

    Configuration:
        npm_token: automation token (action input)
        registry: registry host, default registry.npmjs.org
        access: public or restricted
    """

    def __init__(self, client: PackageRegistryClient) -> None:
        self.client = client

    def publish(self, context: PublishContext) -> PublishResult:
        """Publish the package at context.version.

        Raises:
            ConfigurationError: If no token is configured
            RegistryError: If any npm step fails
        """
        if not context.token:
            raise ConfigurationError(
                "Input required and not supplied: npm_token",
                fix_hint="Pass `npm_token: ${{ secrets.NPM_TOKEN }}` to the step",
            )

        label = f"{context.package_name or 'package'}@{context.version}"
        registry_url = f"https://{context.registry}"

        if context.dry_run:
            return PublishResult.skipped(
                f"Would publish {label} to {registry_url} (dry run)",
                version=context.version,
            )

        actions.mask(context.token)
        with actions.group("Publishing to NPM"):
            self.client.write_credentials(context.registry, context.token)
            self.client.set_registry(registry_url)
            output = self.client.publish(context.access)
            if output:
                actions.info(output.rstrip())

        package_url = None
        if context.package_name:
            package_url = f"https://www.npmjs.com/package/{context.package_name}"
        return PublishResult.success(
            f"Package published: v{context.version}",
            registry_url=registry_url,
            package_url=package_url,
            version=context.version,
        )
