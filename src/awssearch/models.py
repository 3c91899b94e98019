"""Resource snapshots built from AWS API responses."""

from typing import Any, Dict, List, NamedTuple, Optional

from .arns import extract_lb_name
from .tags import Tag, tag_value, tags_from_aws
from .utils import format_timestamp


class Instance(NamedTuple):
    id: str
    name: str
    private_dns: str
    private_ips: List[str]
    state: str
    instance_type: str
    availability_zone: str
    tags: List[Tag]

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> "Instance":
        """Build from one element of ``Reservations[].Instances[]``"""
        tags = tags_from_aws(data.get("Tags"))
        return cls(
            id=data.get("InstanceId", ""),
            name=tag_value(tags, "Name"),
            private_dns=data.get("PrivateDnsName") or "",
            private_ips=[
                ni["PrivateIpAddress"]
                for ni in data.get("NetworkInterfaces") or []
                if ni.get("PrivateIpAddress")
            ],
            state=(data.get("State") or {}).get("Name", ""),
            instance_type=data.get("InstanceType", ""),
            availability_zone=(data.get("Placement") or {}).get("AvailabilityZone", ""),
            tags=tags,
        )

    @property
    def private_ip(self) -> str:
        return self.private_ips[0] if self.private_ips else ""


class AutoScalingGroup(NamedTuple):
    name: str
    arn: str
    instances: List[Dict[str, Any]]
    min_size: Optional[int]
    max_size: Optional[int]
    desired_capacity: Optional[int]
    tags: List[Tag]

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> "AutoScalingGroup":
        return cls(
            name=data.get("AutoScalingGroupName") or "",
            arn=data.get("AutoScalingGroupARN") or "",
            instances=list(data.get("Instances") or []),
            min_size=data.get("MinSize"),
            max_size=data.get("MaxSize"),
            desired_capacity=data.get("DesiredCapacity"),
            tags=tags_from_aws(data.get("Tags")),
        )


class TargetGroup(NamedTuple):
    name: str
    arn: str
    protocol: str
    port: Optional[int]
    target_type: str
    load_balancer_arns: List[str]
    tags: List[Tag]

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> "TargetGroup":
        # DescribeTargetGroups carries no tags; they are looked up afterwards
        return cls(
            name=data.get("TargetGroupName") or "",
            arn=data.get("TargetGroupArn") or "",
            protocol=data.get("Protocol") or "",
            port=data.get("Port"),
            target_type=data.get("TargetType") or "",
            load_balancer_arns=list(data.get("LoadBalancerArns") or []),
            tags=[],
        )

    @property
    def load_balancer_names(self) -> List[str]:
        return [extract_lb_name(arn) for arn in self.load_balancer_arns]


class Activity(NamedTuple):
    status: str
    description: str
    start_time: str
    end_time: str

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> "Activity":
        return cls(
            status=data.get("StatusCode") or "",
            description=data.get("Description") or "",
            start_time=format_timestamp(data.get("StartTime")),
            end_time=format_timestamp(data.get("EndTime")),
        )


class TargetHealth(NamedTuple):
    target_id: str
    port: Optional[int]
    availability_zone: str
    state: str
    reason: str
    description: str

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> "TargetHealth":
        target = data.get("Target") or {}
        health = data.get("TargetHealth") or {}
        return cls(
            target_id=target.get("Id") or "",
            port=target.get("Port"),
            availability_zone=target.get("AvailabilityZone") or "",
            state=health.get("State") or "",
            reason=health.get("Reason") or "",
            description=health.get("Description") or "",
        )
