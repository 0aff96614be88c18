"""
Naming conventions for generated artifacts.

Holds the identifier filter used by templates and the output path
grammar. Downstream tooling locates generated files by these paths,
so every kind of artifact has exactly one path template.
"""

from pathlib import Path
from typing import Optional

from .model import BillConfig


def upper_first(name: str) -> str:
    """Upper-case only the first character (``pk_bill`` -> ``Pk_bill``)."""
    name = str(name)
    return name[:1].upper() + name[1:]


# Output path grammar, relative to the output directory
VO_DIR = "src/public/nc/vo/{module}/{lower}"
CLIENT_DIR = "src/client/nc/ui/{package}/{lower}"
BS_DIR = "src/private/nc/bs/{module}/{lower}"
PUBLIC_ACTION_DIR = "src/public/nc/action/{module}/{lower}"
PUB_ACTION_DIR = "src/private/nc/bs/pub/action"
ITF_DIR = "src/public/nc/itf/{module}/{lower}"

PATH_TEMPLATES = {
    "head_vo": VO_DIR + "/{code}HVO.java",
    "body_vo": VO_DIR + "/{body_code}VO.java",
    "agg_vo": VO_DIR + "/Agg{code}VO.java",
    "controller": CLIENT_DIR + "/controller/ClientCtrl.java",
    "private_btn": CLIENT_DIR + "/controller/IPrivateBtn.java",
    "client_ui": CLIENT_DIR + "/ui/ClientUI.java",
    "business_action": CLIENT_DIR + "/action/BusinessAction.java",
    "delegator": CLIENT_DIR + "/delegator/ClientDelegator.java",
    "event_handler": CLIENT_DIR + "/handler/EventHandler.java",
    "ref_model": CLIENT_DIR + "/refmodel/RefModel.java",
    "insert_action": BS_DIR + "/InsertAction.java",
    "update_action": BS_DIR + "/UpdateAction.java",
    "delete_action": BS_DIR + "/DeleteAction.java",
    "query_action": BS_DIR + "/QueryAction.java",
    "save_action": PUBLIC_ACTION_DIR + "/N_{code}_SAVE.java",
    "pub_action": PUB_ACTION_DIR + "/N_{code}_{action}.java",
    "interface": ITF_DIR + "/I{code}.java",
    "implementation": BS_DIR + "/{code}Impl.java",
    "rule": BS_DIR + "/Rule.java",
    "metadata": "metadata/{lower}.bmf",
}


def relative_output_path(
    kind: str,
    bill: BillConfig,
    body_code: Optional[str] = None,
    action: Optional[str] = None,
) -> str:
    """
    Build the relative output path for one artifact.

    Args:
        kind: Key of PATH_TEMPLATES
        bill: Bill being generated
        body_code: Body entity code, for body VOs
        action: Publish action name, for publish actions

    Returns:
        Path relative to the output directory, using forward slashes

    Raises:
        KeyError: If the artifact kind is unknown
    """
    return PATH_TEMPLATES[kind].format(
        module=bill.module,
        package=bill.package_name,
        code=bill.bill_code,
        lower=bill.class_name_lower,
        body_code=body_code or "",
        action=action or "",
    )


def output_path(
    output_dir: Path,
    kind: str,
    bill: BillConfig,
    body_code: Optional[str] = None,
    action: Optional[str] = None,
) -> Path:
    """Absolute-or-caller-relative path for one artifact under output_dir."""
    return Path(output_dir) / relative_output_path(kind, bill, body_code, action)
