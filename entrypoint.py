"""Container entrypoint: runs the post-build upload command.

Settings come from the environment (see postbuild_upload.cli.main), so the
action can be configured entirely through `with:` inputs or `env:`.
"""

from postbuild_upload.cli import main

if __name__ == "__main__":
    main()
