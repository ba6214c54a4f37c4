"""Tests for AppSettings and the domain models."""
import json

import pytest
from pydantic import ValidationError

from adapters.json_exporter import dump_record, export_record_json
from core.config import AppSettings
from core.domain.fields import MetadataField
from core.domain.models import FetchResult, InstanceMetadata


@pytest.mark.unit
class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.metadata_uri is None
        assert settings.schema_version == "v4"
        assert settings.http_timeout_seconds == 5.0
        assert settings.include_constants_without_document is True
        assert settings.log_level == "INFO"

    def test_metadata_uri_from_ecs_variable(self, monkeypatch, metadata_url):
        monkeypatch.setenv("ECS_CONTAINER_METADATA_URI_V4", metadata_url)
        assert AppSettings().metadata_uri == metadata_url

    def test_blank_metadata_uri_is_none(self, monkeypatch):
        monkeypatch.setenv("ECS_CONTAINER_METADATA_URI_V4", "   ")
        assert AppSettings().metadata_uri is None

    def test_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("FARGATE_METADATA_HTTP_TIMEOUT_SECONDS", "1.5")
        monkeypatch.setenv("FARGATE_METADATA_LOG_LEVEL", "debug")
        monkeypatch.setenv("FARGATE_METADATA_INCLUDE_CONSTANTS_WITHOUT_DOCUMENT", "false")
        settings = AppSettings()
        assert settings.http_timeout_seconds == 1.5
        assert settings.log_level == "DEBUG"
        assert settings.include_constants_without_document is False

    def test_dotenv_file_is_read(self, tmp_path, metadata_url):
        (tmp_path / ".env").write_text(f"ECS_CONTAINER_METADATA_URI_V4={metadata_url}\n", encoding="utf-8")
        assert AppSettings().metadata_uri == metadata_url

    def test_bare_metadata_uri_variable_is_ignored(self, monkeypatch, tmp_path, metadata_url):
        monkeypatch.setenv("METADATA_URI", metadata_url)
        (tmp_path / ".env").write_text(f"metadata_uri={metadata_url}\n", encoding="utf-8")
        assert AppSettings().metadata_uri is None

    def test_prefixed_metadata_uri_variable(self, monkeypatch, metadata_url):
        monkeypatch.setenv("FARGATE_METADATA_METADATA_URI", metadata_url)
        assert AppSettings().metadata_uri == metadata_url

    def test_metadata_uri_keyword(self, metadata_url):
        assert AppSettings(metadata_uri=metadata_url).metadata_uri == metadata_url

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            AppSettings(http_timeout_seconds=0)

    def test_unknown_schema_version(self):
        with pytest.raises(ValidationError, match="unsupported metadata schema"):
            AppSettings(schema_version="v3")


@pytest.mark.unit
class TestModels:
    def test_instance_metadata_round_trips_logical_names(self, expected_record):
        model = InstanceMetadata.from_record(expected_record)
        assert model.account_id == "111122223333"
        assert model.as_record() == expected_record

    def test_instance_metadata_drops_absent_fields(self):
        model = InstanceMetadata.from_record({"instance-type": "FARGATE", "mac": ""})
        assert model.as_record() == {"instance-type": "FARGATE"}

    def test_failure_factory(self, metadata_url):
        result = FetchResult.failure(url=metadata_url, error="unexpected HTTP status 500", status_code=500)
        assert result.ok is False
        assert result.document is None
        assert result.fetched_at.tzinfo is not None

    @pytest.mark.parametrize(
        "field,label",
        [
            (MetadataField.AMI_ID, "Ami id"),
            (MetadataField.AVAILABILITY_ZONE, "Availability zone"),
            (MetadataField.ACCOUNT_ID, "Account id"),
        ],
    )
    def test_field_labels(self, field, label):
        assert field.label() == label

    def test_field_names(self):
        assert [field.value for field in MetadataField] == [
            "ami-id",
            "instance-id",
            "instance-type",
            "local-ipv4",
            "local-hostname",
            "availability-zone",
            "public-hostname",
            "public-ipv4",
            "mac",
            "vpc-id",
            "accountId",
        ]


@pytest.mark.unit
class TestJsonExport:
    def test_dump_is_sorted_and_sparse(self):
        text = dump_record({"vpc-id": "awsvpc", "instance-type": "FARGATE"})
        assert json.loads(text) == {"instance-type": "FARGATE", "vpc-id": "awsvpc"}
        assert text.index("instance-type") < text.index("vpc-id")

    def test_export_creates_parent_dirs(self, tmp_path, expected_record):
        path = export_record_json(record=expected_record, output_path=tmp_path / "out" / "metadata.json")
        assert json.loads(path.read_text(encoding="utf-8")) == expected_record
