# ABOUTME: Create command for provisioning a new C14 archive
# ABOUTME: Resolves name/description/safe defaults and creates an SSH bucket

"""Create command - Create a new archive."""

from typing import Callable

from cleo.helpers import option
from coolname import generate

from c14.api import DEFAULT_LOCK_DAYS, DEFAULT_PLATFORMS, BucketRequest, OnlineAPI
from c14.config import APIConfig, CreateOptions
from c14.exceptions import APIFailure, NoCredentialsError, OnlineAPIError

from .base import C14Command

BOOLEAN_VALUES = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False}


def generate_archive_name() -> str:
    """Return a random "adjective_noun" archive name such as "cheerful_otter"."""
    return "_".join(generate(2))


class CreateCommand(C14Command):
    name = "create"
    description = "Create a new archive"
    usage_line = "create [OPTIONS]"
    help = (
        "Create a new archive, by default with a random name, standard storage (0.0002€/GB/month), "
        "automatic locked in 7 days and your datas will be stored at DC2."
    )
    examples = """
        $ c14 create
        $ c14 create --name "MyBooks" --description "hardware books"
        $ c14 create --name "MyBooks" --description "hardware books" --save "Bookshelf"
"""

    options = [
        option("name", "n", description="Assigns a name", flag=False, default=""),
        option("description", "d", description="Assigns a description", flag=False, default=""),
        option("quiet", "q", description="Don't display the waiting loop", flag=True),
        option(
            "save",
            "s",
            description="Name of the safe to use. If it doesn't exists it will be created.",
            flag=False,
            default="",
        ),
        option("parity", "p", description="Specify a parity to use", flag=False, default="standard"),
        option("large", "l", description="Ask for a large bucket", flag=True),
        option(
            "crypto",
            "c",
            description="Enable aes-256-cbc cryptography, enabled by default.",
            flag=False,
            value_required=False,
            default="true",
        ),
        *C14Command.options,
    ]

    def __init__(self, api: OnlineAPI | None = None, name_generator: Callable[[], str] = generate_archive_name):
        super().__init__()
        self.api = api
        self.name_generator = name_generator
        self.create_options: CreateOptions | None = None

    def check_flags(self, args: list[str]) -> None:
        super().check_flags(args)

        # A bare --crypto carries no value and means true
        value = self.option("crypto")
        crypto = True if value is None else BOOLEAN_VALUES.get(str(value).lower())
        if crypto is None:
            self.line_error(f"invalid boolean value \"{self.option('crypto')}\" for --crypto")
            self.usage_exit()

        self.create_options = CreateOptions(
            name=self.option("name") or "",
            description=self.option("description") or "",
            safe_name=self.option("save") or "",
            quiet=bool(self.option("quiet")),
            parity=self.option("parity") or "standard",
            large_bucket=bool(self.option("large")),
            crypto=crypto,
        ).resolved(self.name_generator)

    def _init_api(self) -> OnlineAPI:
        if self.api is None:
            self.api = OnlineAPI(APIConfig.load(), diagnostics=self.diagnostics)
        return self.api

    def run_command(self, args: list[str]) -> int:
        api = self._init_api()
        opts = self.create_options

        try:
            keys = api.get_ssh_keys()
        except OnlineAPIError as e:
            raise APIFailure("create:get_ssh_keys", e) from e
        if not keys:
            raise NoCredentialsError()

        # Only the first key is attached; there is no rule for picking among several
        key = keys[0]
        self.diagnostics.debug(
            f"using SSH key {key.uuid_ref} \"{key.description}\" {key.fingerprint} ({len(keys)} available)"
        )

        request = BucketRequest(
            safe_name=opts.safe_name_or_default(),
            archive_name=opts.name,
            description=opts.description,
            ssh_key_refs=[key.uuid_ref],
            platforms=list(DEFAULT_PLATFORMS),
            days=DEFAULT_LOCK_DAYS,
            quiet=opts.quiet,
            parity=opts.parity,
            large_bucket=opts.large_bucket,
            crypto=opts.crypto_mode,
        )

        try:
            result = api.create_ssh_bucket_from_scratch(request)
        except OnlineAPIError as e:
            raise APIFailure("create:create_ssh_bucket_from_scratch", e) from e

        self.line(result.archive_id)
        return 0
