"""
Tests for the bill configuration data model.
"""

import pytest

from billgen.core.model import (
    GENERIC_AGG_VO,
    BillConfig,
    BillType,
    FieldConfig,
)

from conftest import make_bill

EDITOR_JSON = {
    "basicInfo": {
        "billCode": "AU84",
        "billName": "采购申请",
        "module": "pu",
        "packageName": "pu",
        "billType": "MULTI",
        "bodyCode": "AU84B",
    },
    "headFields": [
        {"name": "pk_au84", "label": "主键", "primaryKey": True},
        {"name": "billno", "label": "单据号", "uiType": "Text", "length": 40},
    ],
    "bodyFields": [{"name": "crowno", "label": "行号"}],
    "globalConfig": {
        "generateClient": True,
        "generateBusiness": False,
        "outputDir": "/tmp/out",
    },
    "enumConfigs": [
        {
            "name": "Status",
            "displayName": "状态",
            "items": [{"value": "0", "display": "自由"}],
        }
    ],
}


class TestBillType:
    """Test bill type code resolution."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("single", BillType.SINGLE),
            ("MULTI", BillType.MULTI),
            (" archive ", BillType.ARCHIVE),
            ("unknown", BillType.SINGLE),
            ("", BillType.SINGLE),
            (None, BillType.SINGLE),
            (BillType.MULTI, BillType.MULTI),
        ],
    )
    def test_from_code(self, code, expected):
        assert BillType.from_code(code) is expected

    def test_variant_and_description(self):
        assert BillType.MULTI.variant == "Multi"
        assert BillType.ARCHIVE.description == "档案类型"


class TestBillConfigFromDict:
    """Test parsing the editor's JSON structure."""

    def test_basic_info_is_flattened(self):
        bill = BillConfig.from_dict(EDITOR_JSON)

        assert bill.bill_code == "AU84"
        assert bill.bill_name == "采购申请"
        assert bill.package_name == "pu"
        assert bill.bill_type is BillType.MULTI
        assert bill.body_code == "AU84B"

    def test_fields_use_camel_case_keys(self):
        bill = BillConfig.from_dict(EDITOR_JSON)

        assert bill.head_fields[0].primary_key is True
        assert bill.head_fields[1].ui_type == "Text"
        assert bill.head_fields[1].length == 40
        assert bill.body_fields[0].name == "crowno"

    def test_global_config_and_enum_configs(self):
        bill = BillConfig.from_dict(EDITOR_JSON)

        assert bill.generate_client is True
        assert bill.generate_business is False
        assert bill.global_config.output_dir == "/tmp/out"
        assert bill.enums[0].name == "Status"
        assert bill.enums[0].items[0].display == "自由"

    def test_snake_case_keys_are_accepted(self):
        bill = BillConfig.from_dict(
            {"bill_code": "X1", "head_fields": [{"name": "a", "primary_key": True}]}
        )

        assert bill.bill_code == "X1"
        assert bill.head_fields[0].primary_key is True
        assert bill.global_config is None

    def test_body_fields_by_code(self):
        bill = BillConfig.from_dict(
            {
                "billCode": "M",
                "bodyFieldsByCode": {"B1": [{"name": "x"}], "B2": [{"name": "y"}]},
            }
        )

        assert [f.name for f in bill.fields_for_body("B2")] == ["y"]

    def test_to_dict_uses_editor_keys(self):
        data = BillConfig.from_dict(EDITOR_JSON).to_dict()

        assert data["billCode"] == "AU84"
        assert data["billType"] == "multi"
        assert data["headFields"][0]["primaryKey"] is True
        assert "id" not in data["headFields"][0]
        assert data["globalConfig"]["generateClient"] is True
        assert data["globalConfig"]["enums"][0]["name"] == "Status"

    def test_to_dict_is_readable_by_from_dict(self):
        bill = BillConfig.from_dict(EDITOR_JSON)

        assert BillConfig.from_dict(bill.to_dict()) == bill


class TestBillConfigNaming:
    """Test derived class names and packages."""

    def test_head_vo_name(self):
        assert make_bill(bill_code="AU84").head_vo_name == "AU84HVO"
        assert make_bill(bill_code="AU8H").head_vo_name == "AU8HVO"
        assert make_bill(bill_code="AU84", head_code="AU84Head").head_vo_name == "AU84Head"

    def test_head_vo_class_matches_file_name(self):
        bill = make_bill(bill_code="AU8H")

        assert bill.head_vo_class == "AU8HHVO"

    def test_class_name_variants(self):
        bill = make_bill(bill_code="AU84")

        assert bill.class_name == "AU84"
        assert bill.class_name_lower == "au84"

    def test_packages(self, single_bill):
        assert single_bill.vo_package == "nc.vo.m.test"
        assert single_bill.client_package == "nc.ui.p.test"
        assert single_bill.bs_package == "nc.bs.m.test"
        assert single_bill.itf_package == "nc.itf.m.test"
        assert single_bill.interface_name == "ITEST"
        assert single_bill.table_name == "m_test_h"

    def test_aggregate_vo_depends_on_layout(self, single_bill, multi_bill):
        assert single_bill.agg_vo_import == GENERIC_AGG_VO
        assert single_bill.agg_vo_class == "HYBillVO"
        assert multi_bill.agg_vo_import == "nc.vo.m.test.AggTESTVO"
        assert multi_bill.agg_vo_class == "AggTESTVO"

    def test_pk_field_name(self, single_bill):
        assert single_bill.pk_field_name == "pk_test"
        assert make_bill(head_fields=[FieldConfig(name="a")]).pk_field_name == "pk_test"


class TestBodyResolution:
    """Test body entity code and field resolution."""

    def test_body_code_list_wins(self, multi_bill):
        assert multi_bill.resolved_body_codes() == ["TESTB1", "TESTB2"]

    def test_falls_back_to_body_code(self):
        bill = make_bill(bill_type="multi", body_code="TESTB")
        assert bill.resolved_body_codes() == ["TESTB"]

    def test_no_body_codes(self):
        assert make_bill(bill_type="multi").resolved_body_codes() == []

    def test_fields_for_body(self, multi_bill):
        assert [f.name for f in multi_bill.fields_for_body("TESTB2")] == ["vmemo"]
        assert [f.name for f in multi_bill.fields_for_body("OTHER")] == ["vshared"]
        assert [f.name for f in multi_bill.fields_for_body(None)] == ["vshared"]


class TestGlobalShortcuts:
    """Test switches read through the bill."""

    def test_missing_global_config_disables_everything(self):
        bill = make_bill(global_config=None)

        assert not bill.generate_client
        assert not bill.generate_business
        assert not bill.generate_metadata
        assert bill.enums == []

    def test_resolved_author(self, single_bill):
        assert single_bill.resolved_author == "tester"
        assert make_bill(author="alice").resolved_author == "alice"
        assert make_bill(global_config=None).resolved_author == ""


class TestFieldConfig:
    """Test field helpers."""

    @pytest.mark.parametrize(
        "logical, java",
        [
            ("String", "String"),
            ("UFDate", "UFDate"),
            ("int", "Integer"),
            ("decimal", "UFDouble"),
            ("UFBoolean", "UFBoolean"),
            ("enum:Status", "String"),
        ],
    )
    def test_java_type(self, logical, java):
        assert FieldConfig(name="f", type=logical).java_type == java

    def test_accessor_names(self):
        field = FieldConfig(name="billno")

        assert field.getter_name == "getBillno"
        assert field.setter_name == "setBillno"
