"""
Business logic layer.

Emits the CRUD actions, the save entry point, the variant query action
and the fixed set of publish actions the workflow engine dispatches to.
"""

from pathlib import Path

from ..core.generator import LayerGenerator, LayerResult
from ..core.model import BillConfig, BillType

CRUD_ACTIONS = (
    ("insert_action", "bs/common/InsertAction.java.j2"),
    ("update_action", "bs/common/UpdateAction.java.j2"),
    ("delete_action", "bs/common/DeleteAction.java.j2"),
    ("save_action", "bs/common/SaveAction.java.j2"),
)

# Publish action name -> template; order is emission order
PUB_ACTION_TEMPLATES = {
    "DELETE": "bs/common/PubAction_DELETE.java.j2",
    "EDIT": "bs/common/PubAction_EDIT.java.j2",
    "FREEZE": "bs/common/PubAction_Simple.java.j2",
    "UNFREEZE": "bs/common/PubAction_Simple.java.j2",
    "WRITE": "bs/common/PubAction_WRITE.java.j2",
    "WRITEBATCH": "bs/common/PubAction_WRITEBATCH.java.j2",
    "SAVE": "bs/common/PubAction_SAVE.java.j2",
    "APPROVE": "bs/common/PubAction_Approve.java.j2",
}


class BusinessGenerator(LayerGenerator):
    """Generator for server-side actions."""

    name = "bs"

    QUERY_ACTION_TEMPLATES = {
        bill_type: f"bs/by-type/{bill_type.value}/QueryAction_{bill_type.variant}.java.j2"
        for bill_type in BillType
    }

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        bill_type = bill.bill_type
        context = self.build_context(bill)
        files = []

        for kind, template in CRUD_ACTIONS:
            files.append(self.emit(kind, template, bill, output_dir, context))

        files.append(
            self.emit(
                "query_action",
                self.QUERY_ACTION_TEMPLATES[bill_type],
                bill,
                output_dir,
                context,
            )
        )

        for action, template in PUB_ACTION_TEMPLATES.items():
            files.append(
                self.emit(
                    "pub_action",
                    template,
                    bill,
                    output_dir,
                    self.build_context(bill, action_name=action),
                    action=action,
                )
            )

        return LayerResult(bill, files)
