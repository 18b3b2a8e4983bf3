# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Normalization of raw AWS records into the uniform Resource shape.

Every function here is pure: one raw boto3 record plus the region it was
collected for in, one ``Resource`` out. Absent values become empty strings
and absent numbers become "0", so the output never carries nulls.
"""

from datetime import datetime
from typing import Any, Callable

from ..models.enums import ServiceKind
from ..models.resource import GLOBAL_REGION, Region, Resource

Record = dict[str, Any]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _number(value: Any) -> str:
    if value is None:
        return "0"
    return str(value)


def _timestamp(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def extract_tags(tag_list: list[dict[str, str]] | None) -> dict[str, str]:
    """
    Convert AWS tag list format to dictionary.

    Args:
        tag_list: List of tags in AWS format [{"Key": "...", "Value": "..."}]
                  or ECS format [{"key": "...", "value": "..."}]

    Returns:
        Dictionary of tag key-value pairs
    """
    if not tag_list:
        return {}

    result = {}
    for tag in tag_list:
        key = tag.get("Key") or tag.get("key")
        value = tag.get("Value", tag.get("value"))
        # Tags with a missing key or value are skipped
        if key and value is not None:
            result[key] = value

    return result


def normalize_ec2_instance(record: Record, region: Region) -> Resource:
    """Map a DescribeInstances instance to an "EC2 Instance" resource."""
    tags = extract_tags(record.get("Tags"))

    attributes = {
        "instance_type": _text(record.get("InstanceType")),
        "vpc_id": _text(record.get("VpcId")),
        "subnet_id": _text(record.get("SubnetId")),
    }
    if record.get("PublicIpAddress") is not None:
        attributes["public_ip"] = record["PublicIpAddress"]
    if record.get("PrivateIpAddress") is not None:
        attributes["private_ip"] = record["PrivateIpAddress"]

    return Resource(
        id=_text(record.get("InstanceId")),
        name=tags.get("Name", ""),
        type=ServiceKind.EC2_INSTANCE,
        state=_text((record.get("State") or {}).get("Name")),
        region=region,
        tags=tags,
        attributes=attributes,
    )


def normalize_s3_bucket(record: Record, region: Region) -> Resource:
    """Map a ListBuckets entry to an "S3 Bucket" resource.

    Buckets are reported under the global region whatever region the
    listing call was issued against.
    """
    name = _text(record.get("Name"))
    return Resource(
        id=name,
        name=name,
        type=ServiceKind.S3_BUCKET,
        region=GLOBAL_REGION,
        attributes={"created": _timestamp(record.get("CreationDate"))},
    )


def normalize_rds_instance(record: Record, region: Region) -> Resource:
    """Map a DescribeDBInstances entry to an "RDS Instance" resource."""
    identifier = _text(record.get("DBInstanceIdentifier"))

    attributes = {
        "engine": _text(record.get("Engine")),
        "engine_version": _text(record.get("EngineVersion")),
        "instance_class": _text(record.get("DBInstanceClass")),
    }
    endpoint = record.get("Endpoint")
    if endpoint is not None:
        attributes["endpoint"] = _text(endpoint.get("Address"))
        if endpoint.get("Port") is not None:
            attributes["port"] = str(endpoint["Port"])

    return Resource(
        id=identifier,
        name=identifier,
        type=ServiceKind.RDS_INSTANCE,
        state=_text(record.get("DBInstanceStatus")),
        region=region,
        attributes=attributes,
    )


def normalize_lambda_function(record: Record, region: Region) -> Resource:
    """Map a ListFunctions configuration to a "Lambda Function" resource."""
    return Resource(
        id=_text(record.get("FunctionArn")),
        name=_text(record.get("FunctionName")),
        type=ServiceKind.LAMBDA_FUNCTION,
        state=_text(record.get("State")),
        region=region,
        attributes={
            "runtime": _text(record.get("Runtime")),
            "handler": _text(record.get("Handler")),
            "memory_size": _number(record.get("MemorySize")),
            "timeout": _number(record.get("Timeout")),
        },
    )


def normalize_ecs_cluster(record: Record, region: Region) -> Resource:
    """Map a DescribeClusters entry to an "ECS Cluster" resource."""
    return Resource(
        id=_text(record.get("clusterArn")),
        name=_text(record.get("clusterName")),
        type=ServiceKind.ECS_CLUSTER,
        state=_text(record.get("status")),
        region=region,
        tags=extract_tags(record.get("tags")),
        attributes={
            "active_services_count": _number(record.get("activeServicesCount")),
            "running_tasks_count": _number(record.get("runningTasksCount")),
            "pending_tasks_count": _number(record.get("pendingTasksCount")),
        },
    )


def normalize_iam_user(record: Record, region: Region) -> Resource:
    """Map a ListUsers entry to an "IAM User" resource (always global)."""
    return Resource(
        id=_text(record.get("Arn")),
        name=_text(record.get("UserName")),
        type=ServiceKind.IAM_USER,
        region=GLOBAL_REGION,
        tags=extract_tags(record.get("Tags")),
        attributes={
            "path": _text(record.get("Path")),
            "created": _timestamp(record.get("CreateDate")),
            "user_id": _text(record.get("UserId")),
        },
    )


NORMALIZERS: dict[ServiceKind, Callable[[Record, Region], Resource]] = {
    ServiceKind.EC2_INSTANCE: normalize_ec2_instance,
    ServiceKind.S3_BUCKET: normalize_s3_bucket,
    ServiceKind.RDS_INSTANCE: normalize_rds_instance,
    ServiceKind.LAMBDA_FUNCTION: normalize_lambda_function,
    ServiceKind.ECS_CLUSTER: normalize_ecs_cluster,
    ServiceKind.IAM_USER: normalize_iam_user,
}


def normalize(record: Record, kind: ServiceKind, region: Region) -> Resource:
    """
    Convert one raw provider record of the given kind into a Resource.

    Args:
        record: Raw record as returned by boto3
        kind: Service kind the record was listed as
        region: Region the record was collected in (ignored for global kinds)

    Returns:
        Normalized Resource
    """
    return NORMALIZERS[kind](record, region)
