# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Property-based tests for multi-region inventory aggregation.

Property 1: Count Consistency
*For any* set of regions, listing results and collector failures,
`total_count` SHALL equal the number of resources over all region entries,
and there SHALL be exactly one entry per distinct requested region.

Property 2: Partial Failure Isolation
*For any* failure pattern, a region entry SHALL carry an error if and only
if one of its applicable collectors failed, and it SHALL still contain every
resource of the collectors that succeeded.

Property 3: Global Resources Once
*For any* request, global resources (S3 buckets, IAM users) SHALL appear only
in the anchor region's entry, and global listing calls SHALL only be issued
when the anchor region is requested.

Property 4: Repeatability
*For any* request, two runs against the same provider state SHALL report the
same resources.
"""

import asyncio

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from cloudy.clients.aws_client import AWSAPIError
from cloudy.models import GLOBAL_REGION, Region, ServiceKind
from cloudy.services.inventory_aggregator import InventoryAggregator
from cloudy.services.region_aggregator import RegionAggregator
from cloudy.services.service_collector import ServiceCollector

ANCHOR = "us-east-1"

SAMPLE_REGION_NAMES = [
    "us-east-1", "us-east-2", "us-west-2", "eu-west-1",
    "eu-central-1", "ap-south-1", "ap-northeast-1", "sa-east-1",
]

# Listing method whose failure fails each kind
FAILING_METHOD = {
    ServiceKind.EC2_INSTANCE: "describe_ec2_instances",
    ServiceKind.S3_BUCKET: "list_s3_buckets",
    ServiceKind.RDS_INSTANCE: "describe_rds_instances",
    ServiceKind.LAMBDA_FUNCTION: "list_lambda_functions",
    ServiceKind.ECS_CLUSTER: "list_ecs_cluster_arns",
    ServiceKind.IAM_USER: "list_iam_users",
}

region_list_strategy = st.lists(st.sampled_from(SAMPLE_REGION_NAMES), min_size=0, max_size=6)

counts_strategy = st.fixed_dictionaries(
    {kind: st.integers(min_value=0, max_value=3) for kind in ServiceKind}
)

failures_strategy = st.dictionaries(
    st.sampled_from(SAMPLE_REGION_NAMES),
    st.sets(st.sampled_from(list(ServiceKind)), max_size=3),
    max_size=4,
)


def _records(region, counts):
    clusters = [
        f"arn:aws:ecs:{region}:1:cluster/c{n}" for n in range(counts[ServiceKind.ECS_CLUSTER])
    ]
    return {
        "describe_ec2_instances": [
            {"InstanceId": f"i-{n}"} for n in range(counts[ServiceKind.EC2_INSTANCE])
        ],
        "list_s3_buckets": [{"Name": f"bucket-{n}"} for n in range(counts[ServiceKind.S3_BUCKET])],
        "describe_rds_instances": [
            {"DBInstanceIdentifier": f"db-{n}"} for n in range(counts[ServiceKind.RDS_INSTANCE])
        ],
        "list_lambda_functions": [
            {"FunctionArn": f"arn:aws:lambda:{region}:1:function:f{n}", "FunctionName": f"f{n}"}
            for n in range(counts[ServiceKind.LAMBDA_FUNCTION])
        ],
        "list_ecs_cluster_arns": clusters,
        "describe_ecs_clusters": [{"clusterArn": arn} for arn in clusters],
        "list_iam_users": [
            {"Arn": f"arn:aws:iam::1:user/u{n}", "UserName": f"u{n}"}
            for n in range(counts[ServiceKind.IAM_USER])
        ],
    }


def _build(fake_factory, counts, failures):
    factory = fake_factory(
        records={region: _records(region, counts) for region in SAMPLE_REGION_NAMES},
        failures={
            region: {FAILING_METHOD[kind]: AWSAPIError(f"{kind.value} denied") for kind in kinds}
            for region, kinds in failures.items()
        },
    )
    collector = ServiceCollector(factory, anchor_region=ANCHOR)
    aggregator = InventoryAggregator(RegionAggregator(collector, anchor_region=ANCHOR))
    return factory, aggregator


def _applicable(region):
    return [kind for kind in ServiceKind if not kind.is_global or region == ANCHOR]


class TestInventoryProperties:
    """Property tests for InventoryAggregator.run."""

    @given(regions=region_list_strategy, counts=counts_strategy, failures=failures_strategy)
    @settings(max_examples=60, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_count_consistency_and_failure_isolation(
        self, fake_factory, regions, counts, failures
    ):
        """Property 1 and Property 2."""
        _, aggregator = _build(fake_factory, counts, failures)

        report = asyncio.run(aggregator.run(regions))

        assert report.total_count == sum(len(entry.resources) for entry in report.region_data)
        assert sorted(entry.region for entry in report.region_data) == sorted(set(regions))

        for entry in report.region_data:
            kinds = _applicable(entry.region)
            failed = [kind for kind in kinds if kind in failures.get(entry.region, set())]
            assert entry.has_error == bool(failed)
            if failed:
                assert entry.error.startswith(f"encountered {len(failed)} errors")

            expected = sum(counts[kind] for kind in kinds if kind not in failed)
            assert len(entry.resources) == expected

    @given(regions=region_list_strategy, counts=counts_strategy)
    @settings(max_examples=40, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_global_resources_only_in_anchor(self, fake_factory, regions, counts):
        """Property 3."""
        factory, aggregator = _build(fake_factory, counts, {})

        report = asyncio.run(aggregator.run(regions))

        for entry in report.region_data:
            for resource in entry.resources:
                if resource.region.is_global:
                    assert entry.region == ANCHOR
                else:
                    assert resource.region == Region.regional(entry.region)

        global_calls = [
            region for region, method in factory.calls
            if method in ("list_s3_buckets", "list_iam_users")
        ]
        if ANCHOR in regions:
            assert global_calls == [ANCHOR, ANCHOR]
        else:
            assert global_calls == []

    @given(regions=region_list_strategy, counts=counts_strategy, failures=failures_strategy)
    @settings(max_examples=30, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_repeated_runs_report_same_resources(self, fake_factory, regions, counts, failures):
        """Property 4."""
        _, aggregator = _build(fake_factory, counts, failures)

        first = asyncio.run(aggregator.run(regions))
        second = asyncio.run(aggregator.run(regions))

        def keys(report):
            return sorted(
                (entry.region, resource.key)
                for entry in report.region_data
                for resource in entry.resources
            )

        assert keys(first) == keys(second)
        assert first.total_count == second.total_count


class TestRegionProperties:
    """Property tests for the tagged region value."""

    @given(code=st.sampled_from(SAMPLE_REGION_NAMES))
    @settings(max_examples=20)
    def test_parse_inverts_str(self, code):
        region = Region.regional(code)
        assert Region.parse(str(region)) == region

    def test_global_parse(self):
        assert Region.parse(str(GLOBAL_REGION)) is GLOBAL_REGION
