"""
Shared fixtures for billgen tests.
"""

import pytest

from billgen.core.config import GeneratorConfig
from billgen.core.identifiers import sequential_ids
from billgen.core.model import (
    BillConfig,
    EnumConfig,
    EnumItem,
    FieldConfig,
    GlobalConfig,
)
from billgen.core.templates import FileSink, TemplateEngine


class RecordingEngine(TemplateEngine):
    """Template engine that remembers every template it renders."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.rendered = []

    def render_template(self, template_name, context):
        self.rendered.append((template_name, dict(context)))
        return super().render_template(template_name, context)


def head_fields():
    return [
        FieldConfig(name="pk_test", label="主键", type="UFID", primary_key=True),
        FieldConfig(name="billno", label="单据号", required=True),
        FieldConfig(name="billdate", label="单据日期", type="UFDate"),
        FieldConfig(name="corp", label="公司", ui_type="Combo"),
        FieldConfig(name="operatorid", label="制单人", ui_type="combo"),
        FieldConfig(name="vstatus", label="单据状态", type="enum:BillStatus"),
        FieldConfig(name="vbillstatus", label="审批状态"),
        FieldConfig(name="nmny", label="金额", type="UFDouble"),
    ]


def make_bill(**overrides) -> BillConfig:
    """Single-header bill with every generation switch off."""
    values = dict(
        bill_code="TEST",
        bill_name="测试单",
        module="m",
        package_name="p",
        bill_type="single",
        head_fields=head_fields(),
        global_config=GlobalConfig(
            author="tester",
            enums=[
                EnumConfig(
                    name="BillStatus",
                    display_name="单据状态",
                    class_name="BillStatusEnum",
                    items=[EnumItem("0", "自由"), EnumItem("1", "审批通过")],
                )
            ],
        ),
    )
    values.update(overrides)
    return BillConfig(**values)


@pytest.fixture
def single_bill():
    return make_bill()


@pytest.fixture
def multi_bill():
    return make_bill(
        bill_type="multi",
        body_code_list=["TESTB1", "TESTB2"],
        body_fields=[FieldConfig(name="vshared", label="共享")],
        body_fields_by_code={
            "TESTB1": [
                FieldConfig(name="pk_testb1", primary_key=True),
                FieldConfig(name="crowno", label="行号"),
            ],
            "TESTB2": [FieldConfig(name="vmemo", label="备注")],
        },
    )


@pytest.fixture
def full_bill():
    """Single bill with every layer switched on."""
    bill = make_bill()
    bill.global_config.generate_client = True
    bill.global_config.generate_business = True
    bill.global_config.generate_metadata = True
    bill.global_config.enable_user = True
    bill.global_config.enable_bill_status = True
    return bill


@pytest.fixture
def config():
    return GeneratorConfig(date="2026-02-10", author="tester")


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def sink():
    return FileSink("gbk")


@pytest.fixture
def id_factory():
    return sequential_ids("T")


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "out"
