"""Pydantic models for the test matrix wire format, plus small helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class DeviceSpecification(BaseModel):
    """One device of the environment matrix.

    Values are relayed as given (numbers become strings); the service decides
    whether a model, version, locale or orientation is valid.
    """

    model_id: Optional[str] = Field(default=None, alias="iosModelId")
    os_version_id: Optional[str] = Field(default=None, alias="iosVersionId")
    locale: Optional[str] = None
    orientation: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True
        protected_namespaces = ()
        coerce_numbers_to_str = True


DeviceLike = Union[DeviceSpecification, Mapping[str, Any]]


def to_device_specification(device: DeviceLike) -> DeviceSpecification:
    if isinstance(device, DeviceSpecification):
        return device
    return DeviceSpecification.model_validate(dict(device))


class GcsReference(BaseModel):
    gcs_path: str = Field(alias="gcsPath")

    class Config:
        populate_by_name = True


class TestTimeout(BaseModel):
    __test__ = False

    seconds: int


class IosXcTest(BaseModel):
    tests_zip: GcsReference = Field(alias="testsZip")

    class Config:
        populate_by_name = True


class TestSpecification(BaseModel):
    __test__ = False

    test_timeout: TestTimeout = Field(alias="testTimeout")
    # Sent as an empty object; the service fills in defaults
    ios_test_setup: Dict[str, Any] = Field(default_factory=dict, alias="iosTestSetup")
    ios_xc_test: IosXcTest = Field(alias="iosXcTest")

    class Config:
        populate_by_name = True


class IosDeviceList(BaseModel):
    ios_devices: List[DeviceSpecification] = Field(default_factory=list, alias="iosDevices")

    class Config:
        populate_by_name = True


class EnvironmentMatrix(BaseModel):
    ios_device_list: IosDeviceList = Field(alias="iosDeviceList")

    class Config:
        populate_by_name = True


class ResultStorage(BaseModel):
    google_cloud_storage: GcsReference = Field(alias="googleCloudStorage")

    class Config:
        populate_by_name = True


class ClientInfoDetail(BaseModel):
    key: str
    value: str


class ClientInfo(BaseModel):
    name: str
    client_info_details: List[ClientInfoDetail] = Field(default_factory=list, alias="clientInfoDetails")

    class Config:
        populate_by_name = True


class TestMatrixRequest(BaseModel):
    """Body of a testMatrices.create call."""

    __test__ = False

    project_id: str = Field(alias="projectId")
    test_specification: TestSpecification = Field(alias="testSpecification")
    environment_matrix: EnvironmentMatrix = Field(alias="environmentMatrix")
    result_storage: ResultStorage = Field(alias="resultStorage")
    client_info: ClientInfo = Field(alias="clientInfo")

    class Config:
        populate_by_name = True

    @classmethod
    def build(
        cls,
        *,
        project_id: str,
        app_path: str,
        result_path: str,
        devices: List[DeviceLike],
        timeout_sec: int,
        client_name: str,
        client_details: List[ClientInfoDetail],
    ) -> "TestMatrixRequest":
        return cls(
            project_id=project_id,
            test_specification=TestSpecification(
                test_timeout=TestTimeout(seconds=timeout_sec),
                ios_xc_test=IosXcTest(tests_zip=GcsReference(gcs_path=app_path)),
            ),
            environment_matrix=EnvironmentMatrix(
                ios_device_list=IosDeviceList(
                    ios_devices=[to_device_specification(d) for d in devices]
                )
            ),
            result_storage=ResultStorage(
                google_cloud_storage=GcsReference(gcs_path=result_path)
            ),
            client_info=ClientInfo(name=client_name, client_info_details=client_details),
        )

    def to_jsonable(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def merge_client_details(
    client_metadata: Optional[Mapping[str, Any]], version: str
) -> List[ClientInfoDetail]:
    """Stamp ``version`` into a copy of the caller's metadata and flatten it.

    An existing ``version`` key keeps its position but takes the new value.
    """
    merged: Dict[str, Any] = dict(client_metadata or {})
    merged["version"] = version
    return [ClientInfoDetail(key=str(k), value=str(v)) for k, v in merged.items()]


def tool_results_executions(matrix_result: Optional[Mapping[str, Any]]) -> List[tuple[str, str]]:
    """Return unique ``(history_id, execution_id)`` pairs referenced by a matrix.

    Pairs come from ``testExecutions[].toolResultsStep`` in first-seen order.
    Executions that have not been assigned a tool results step yet are skipped.
    """
    pairs: List[tuple[str, str]] = []
    executions = (matrix_result or {}).get("testExecutions") or []
    if not isinstance(executions, list):
        return pairs
    for execution in executions:
        if not isinstance(execution, Mapping):
            continue
        step = execution.get("toolResultsStep") or {}
        history_id = step.get("historyId")
        execution_id = step.get("executionId")
        if not history_id or not execution_id:
            continue
        pair = (str(history_id), str(execution_id))
        if pair not in pairs:
            pairs.append(pair)
    return pairs


def gcs_path(bucket: str, *parts: str) -> str:
    """Build a ``gs://`` URL from a bucket name and path segments."""
    segments = [bucket.strip("/")] + [p.strip("/") for p in parts if p and p.strip("/")]
    return "gs://" + "/".join(segments)
