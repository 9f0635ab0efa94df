import logging

import pytest

from buildstamp.info import VersionInfo, register
from buildstamp.metrics import registry_snapshot
from buildstamp.record import BuildMetadata
from buildstamp.registry import (
    AttributeNotFoundError,
    InstanceAlreadyExistsError,
    InstanceNotFoundError,
    IntrospectionRegistry,
    MalformedNameError,
    ObjectName,
    RegistryUnavailableError,
    VersionBean,
    platform_registry,
)

from conftest import SCENARIO


@pytest.fixture
def vi():
    return VersionInfo(BuildMetadata(**SCENARIO), product_name="Hadoop")


def test_register_returns_handle(vi):
    reg = IntrospectionRegistry("hadoop")
    handle = register("NameNode", registry=reg, info=vi)
    assert handle == ObjectName("hadoop", "NameNode", "Version")
    assert str(handle) == "hadoop:service=NameNode,name=Version"
    assert reg.is_registered(handle)
    assert reg.get_attribute(handle, "version") == "Hadoop 1.2.0"
    assert reg.get_attribute(handle, "sourceInfo") == "Source scm://repo -r abcd123"
    assert reg.get_attribute(handle, "compiledBy") == "Compiled by alice on 2024-01-01"


def test_duplicate_registration_returns_none_and_logs(vi, caplog):
    reg = IntrospectionRegistry()
    assert register("DataNode", registry=reg, info=vi) is not None
    with caplog.at_level(logging.WARNING, logger="buildstamp"):
        assert register("DataNode", registry=reg, info=vi) is None
    assert "DataNode" in caplog.text
    assert len(reg) == 1


def test_closed_registry_returns_none(vi):
    reg = IntrospectionRegistry()
    reg.close()
    assert register("JobTracker", registry=reg, info=vi) is None


def test_malformed_component_name_returns_none(vi):
    reg = IntrospectionRegistry()
    assert register("bad,name", registry=reg, info=vi) is None
    assert register("", registry=reg, info=vi) is None
    assert len(reg) == 0


def test_register_with_absent_metadata(vi):
    reg = IntrospectionRegistry()
    handle = register("TaskTracker", registry=reg, info=VersionInfo(BuildMetadata.unknown()))
    assert reg.get_attribute(handle, "version") == "Buildstamp Unknown"
    assert reg.get_attribute(handle, "sourceInfo") == "Source Unknown -r Unknown"


def test_register_uses_platform_registry_and_default_info(monkeypatch, metadata_file):
    monkeypatch.setenv("BUILDSTAMP_METADATA_PATH", str(metadata_file))
    handle = register("platform-default-test")
    try:
        assert handle is not None
        assert platform_registry().get_attribute(handle, "compiledBy") == "Compiled by alice on 2024-01-01"
    finally:
        platform_registry().unregister(handle)


def test_registry_errors(vi):
    reg = IntrospectionRegistry()
    bean = VersionBean.from_info(vi)
    name = reg.register_bean("svc", "Version", bean)
    with pytest.raises(InstanceAlreadyExistsError):
        reg.register_bean("svc", "Version", bean)
    with pytest.raises(AttributeNotFoundError):
        reg.get_attribute(name, "source_info")
    reg.unregister(name)
    with pytest.raises(InstanceNotFoundError):
        reg.unregister(name)
    with pytest.raises(InstanceNotFoundError):
        reg.get_attribute(name, "version")
    with pytest.raises(MalformedNameError):
        ObjectName("d", "a=b", "Version")
    reg.close()
    with pytest.raises(RegistryUnavailableError):
        reg.register_bean("svc", "Version", bean)


def test_bean_exposes_camel_case_attributes(vi):
    assert VersionBean.from_info(vi).attributes() == {
        "version": "Hadoop 1.2.0",
        "sourceInfo": "Source scm://repo -r abcd123",
        "compiledBy": "Compiled by alice on 2024-01-01",
    }


def test_registry_snapshot(vi):
    reg = IntrospectionRegistry("hadoop")
    register("b-service", registry=reg, info=vi)
    register("a-service", registry=reg, info=vi)
    snap = registry_snapshot(reg)
    assert list(snap) == ["hadoop:service=a-service,name=Version", "hadoop:service=b-service,name=Version"]
    assert snap["hadoop:service=a-service,name=Version"]["sourceInfo"] == "Source scm://repo -r abcd123"
    # snapshot is a copy
    snap.clear()
    assert len(reg) == 2
