"""Command-line interface for bucketfs.

This module provides a filesystem-style CLI over S3-compatible object storage.

Commands:
    - ls: List a bucket, prefix or the storage root (optionally recursive)
    - stat: Describe an object, directory, bucket or the storage root
    - cat: Write an object (or a byte range of it) to stdout
    - put: Upload a local file
    - mb: Make a bucket
    - set-acl: Set the canned ACL of a bucket

URLs are either s3://bucket/key or http(s)://endpoint/bucket/key.
"""

import os
import shutil
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    aws_access_key_option,
    aws_endpoint_option,
    aws_profile_option,
    aws_region_option,
    aws_secret_key_option,
    aws_session_token_option,
    create_s3_config,
    recursive_option,
)
from .client import Entry
from .unified import list_storage_contents, new_client, stat_storage

app = typer.Typer(
    name="bucketfs",
    help="Browse S3-compatible object storage as directories and files.",
    no_args_is_help=True,
)

UrlArgument = Annotated[str, typer.Argument(help="Storage URL, e.g. s3://bucket/key")]
AccessKeyOption = Annotated[Optional[str], aws_access_key_option()]
SecretKeyOption = Annotated[Optional[str], aws_secret_key_option()]
SessionTokenOption = Annotated[Optional[str], aws_session_token_option()]
RegionOption = Annotated[Optional[str], aws_region_option()]
EndpointOption = Annotated[Optional[str], aws_endpoint_option()]
ProfileOption = Annotated[Optional[str], aws_profile_option()]


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucketfs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    bucketfs: directories and files on top of buckets and keys.
    """
    pass


def _human_size(size: int) -> str:
    if size >= 1024**3:
        return f"{size / (1024**3):.2f} GB"
    elif size >= 1024**2:
        return f"{size / (1024**2):.2f} MB"
    elif size >= 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size} B"


def _format_entry(entry: Entry) -> str:
    name = f"{entry.name}/" if entry.is_directory else entry.name
    timestamp = entry.mod_time.strftime("%Y-%m-%d %H:%M:%S")
    return f"[{timestamp}] {_human_size(entry.size):>10} {name}"


@app.command("ls")
def ls_cmd(
    url: UrlArgument,
    recursive: Annotated[bool, recursive_option()] = False,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    List directories and files at a URL.

    Examples:
        bucketfs ls s3://
        bucketfs ls s3://photos/2020/
        bucketfs ls -r s3://photos --aws-profile myprofile
    """
    try:
        config = create_s3_config(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        with list_storage_contents(url, config, recursive=recursive) as entries:
            for entry in entries:
                typer.echo(_format_entry(entry))

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("stat")
def stat_cmd(
    url: UrlArgument,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Describe what is stored at a URL.
    """
    try:
        config = create_s3_config(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        entry = stat_storage(url, config)

        typer.echo(f"Name: {entry.name}")
        typer.echo(f"Type: {'directory' if entry.is_directory else 'file'}")
        typer.echo(f"Size: {entry.size:,} bytes ({_human_size(entry.size)})")
        typer.echo(f"Modified: {entry.mod_time.isoformat()}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("cat")
def cat_cmd(
    url: UrlArgument,
    offset: Annotated[
        int, typer.Option("--offset", help="First byte to read", min=0)
    ] = 0,
    length: Annotated[
        int, typer.Option("--length", help="Bytes to read, 0 for all", min=0)
    ] = 0,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Write an object to stdout.
    """
    try:
        config = create_s3_config(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        body, _ = new_client(url, config).get_object(offset=offset, length=length)
        try:
            shutil.copyfileobj(body, typer.get_binary_stream("stdout"))
        finally:
            body.close()

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("put")
def put_cmd(
    source: Annotated[
        Path, typer.Argument(help="Local file to upload", exists=True, dir_okay=False)
    ],
    url: UrlArgument,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Upload a local file to an object URL.
    """
    try:
        config = create_s3_config(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        size = os.path.getsize(source)
        with open(source, "rb") as data:
            new_client(url, config).put_object(size, data)

        typer.echo(f"Uploaded {source} to {url} ({_human_size(size)})")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("mb")
def mb_cmd(
    url: UrlArgument,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Make a bucket.
    """
    try:
        config = create_s3_config(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        new_client(url, config).make_bucket()
        typer.echo(f"Bucket created: {url}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("set-acl")
def set_acl_cmd(
    url: UrlArgument,
    acl: Annotated[
        str,
        typer.Argument(
            help="Canned ACL: private, public-read, public-read-write "
            "or authenticated-read"
        ),
    ],
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Set the canned ACL of a bucket.
    """
    try:
        config = create_s3_config(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

        new_client(url, config).set_bucket_acl(acl)
        typer.echo(f"ACL '{acl}' set on {url}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
