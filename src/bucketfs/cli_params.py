"""Shared CLI parameter utilities to reduce duplication.

Every command talks to object storage and accepts the same connection
options. The functions here return the typer options once so that names and
help text stay consistent across commands.

Usage:
    @app.command()
    def my_command(
        url: Annotated[str, typer.Argument()],
        region_name: Annotated[Optional[str], aws_region_option()] = None,
    ):
        pass
"""

from typing import Optional

import typer

from .objectstorage import S3ClientConfig


def aws_access_key_option() -> typer.models.OptionInfo:
    """AWS access key ID option."""
    return typer.Option("--access-key-id", help="AWS access key ID")


def aws_secret_key_option() -> typer.models.OptionInfo:
    """AWS secret access key option."""
    return typer.Option("--secret-access-key", help="AWS secret access key")


def aws_session_token_option() -> typer.models.OptionInfo:
    """AWS session token option."""
    return typer.Option("--session-token", help="AWS session token")


def aws_region_option() -> typer.models.OptionInfo:
    """AWS region option."""
    return typer.Option(
        "--region", help="AWS region name (derived from the endpoint when omitted)"
    )


def aws_endpoint_option() -> typer.models.OptionInfo:
    """S3 endpoint URL option."""
    return typer.Option(
        "--endpoint-url", help="Custom S3 endpoint URL for S3-compatible services"
    )


def aws_profile_option() -> typer.models.OptionInfo:
    """AWS profile option."""
    return typer.Option("--aws-profile", help="AWS CLI profile name")


def recursive_option() -> typer.models.OptionInfo:
    """Recursive listing option."""
    return typer.Option(
        "--recursive", "-r", help="List every object below the URL"
    )


def create_s3_config(
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
) -> S3ClientConfig:
    """Build the client configuration from the shared options."""
    return S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )
