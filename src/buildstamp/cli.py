"""Print the build provenance of this distribution.

Arguments are accepted and ignored so ad-hoc invocations such as
``buildstamp --version`` always get the report and exit 0.
"""
import sys
from typing import List, Optional, Sequence

from .info import VersionInfo, get_version_info


def value_form(value: str) -> str:
    return f"<value>{value}</value>"


def format_report(info: VersionInfo) -> List[str]:
    return [
        f"{info.product_name} {value_form(info.get_version())}",
        f"Subversion {value_form(info.get_url() + ' -r ' + info.get_revision())}",
        f"Compiled by {value_form(info.get_user() + ' on ' + info.get_date())}",
        f"Build Version {value_form(info.get_build_version())}",
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    for line in format_report(get_version_info()):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
