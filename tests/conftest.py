"""Shared fixtures for AWS Search Tool tests."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from awssearch.utils import set_debug_enabled

ALB_ARN = "arn:aws:elasticloadbalancing:us-west-2:123456789012:loadbalancer/app/api-alb/50dc6c495c0c9188"
NLB_ARN = "arn:aws:elasticloadbalancing:us-west-2:123456789012:loadbalancer/net/batch-nlb/73e2d6bc24d8a067"


def tg_arn(name):
    return f"arn:aws:elasticloadbalancing:us-west-2:123456789012:targetgroup/{name}/6d0ecf831eec9f09"


def ec2_instance(instance_id, name=None, ip="10.0.0.1", state="running", tags=None):
    all_tags = list(tags or [])
    if name is not None:
        all_tags.insert(0, {"Key": "Name", "Value": name})
    return {
        "InstanceId": instance_id,
        "InstanceType": "t3.micro",
        "State": {"Code": 16, "Name": state},
        "Placement": {"AvailabilityZone": "us-west-2a"},
        "PrivateDnsName": f"ip-{ip.replace('.', '-')}.us-west-2.compute.internal",
        "NetworkInterfaces": [{"PrivateIpAddress": ip}],
        "Tags": all_tags,
    }


def asg_group(name, instances=0, tags=None, desired=1, min_size=0, max_size=2):
    return {
        "AutoScalingGroupName": name,
        "AutoScalingGroupARN": f"arn:aws:autoscaling:us-west-2:123456789012:autoScalingGroup:uuid:autoScalingGroupName/{name}",
        "MinSize": min_size,
        "MaxSize": max_size,
        "DesiredCapacity": desired,
        "Instances": [
            {
                "InstanceId": f"i-{name}-{n}",
                "InstanceType": "t3.small",
                "AvailabilityZone": "us-west-2b",
                "LifecycleState": "InService",
                "HealthStatus": "Healthy",
            }
            for n in range(instances)
        ],
        "Tags": tags or [],
    }


def target_group(name, lb_arns=None, port=80):
    return {
        "TargetGroupName": name,
        "TargetGroupArn": tg_arn(name),
        "Protocol": "HTTP",
        "Port": port,
        "TargetType": "ip",
        "LoadBalancerArns": lb_arns or [],
    }


@pytest.fixture(autouse=True)
def reset_debug():
    set_debug_enabled(False)
    yield
    set_debug_enabled(False)


@pytest.fixture
def ec2_client():
    """EC2 client returning two pages of reservations"""
    client = Mock()
    client.describe_instances.side_effect = [
        {
            "Reservations": [
                {
                    "Instances": [
                        ec2_instance(
                            "i-0aaa", "test-api", "10.0.0.1", tags=[{"Key": "Env", "Value": "staging"}]
                        ),
                        ec2_instance("i-0bbb", "web", "10.0.0.2"),
                    ]
                }
            ],
            "NextToken": "page-2",
        },
        {
            "Reservations": [
                {"Instances": [ec2_instance("i-0ccc", "batch", "10.0.0.3", state="stopped")]}
            ],
        },
    ]
    return client


@pytest.fixture
def asg_client():
    client = Mock()
    client.describe_auto_scaling_groups.return_value = {
        "AutoScalingGroups": [
            asg_group("spot-api", instances=2, tags=[{"Key": "Env", "Value": "prod"}]),
            asg_group("spot-web", instances=1, tags=[{"Key": "Role", "Value": "frontend"}]),
        ]
    }
    client.describe_scaling_activities.return_value = {
        "Activities": [
            {
                "StatusCode": "Successful",
                "Description": "Launching a new EC2 instance: i-0aaa",
                "StartTime": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
                "EndTime": datetime(2024, 1, 2, 3, 5, 0, tzinfo=timezone.utc),
            }
        ]
    }
    return client


@pytest.fixture
def elbv2_client():
    client = Mock()
    client.describe_target_groups.return_value = {
        "TargetGroups": [
            target_group("api-tg", [ALB_ARN]),
            target_group("batch-tg", [NLB_ARN], port=8080),
        ]
    }
    client.describe_tags.return_value = {
        "TagDescriptions": [
            {"ResourceArn": tg_arn("api-tg"), "Tags": [{"Key": "Env", "Value": "prod"}]},
            {"ResourceArn": tg_arn("batch-tg"), "Tags": [{"Key": "Team", "Value": "data"}]},
        ]
    }
    client.describe_target_health.return_value = {
        "TargetHealthDescriptions": [
            {
                "Target": {"Id": "10.0.1.5", "Port": 80, "AvailabilityZone": "us-west-2a"},
                "TargetHealth": {"State": "healthy"},
            },
            {
                "Target": {"Id": "10.0.1.6", "Port": 80, "AvailabilityZone": "us-west-2b"},
                "TargetHealth": {"State": "unhealthy", "Reason": "Target.FailedHealthChecks"},
            },
        ]
    }
    return client
