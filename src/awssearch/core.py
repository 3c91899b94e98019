"""Core AWS operations for AWS Search Tool.

Each resource kind is served by a fetcher that drains the kind's list API,
filters the snapshot with the query matcher and, for info views, projects
tags into extra columns.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from .config import TAG_BATCH_SIZE
from .exceptions import AmbiguousNarrowing, UpstreamFailure
from .filters import filter_exact, filter_resources, normalize_instance_ids
from .models import Activity, AutoScalingGroup, Instance, TargetGroup, TargetHealth
from .pager import Page, drain, token_page_fetcher
from .tags import Tag, project_tags, resolve_tag_columns, tags_from_aws
from .utils import debug_print

Table = Tuple[List[str], List[List[str]]]


def call_aws(operation: Callable[..., Any], name: str, **params: Any) -> Any:
    """Invoke one client operation, turning botocore errors into UpstreamFailure"""
    debug_print(f"Calling {name} with {params}")  # pragma: no mutate
    try:
        return operation(**params)
    except (ClientError, BotoCoreError) as e:
        debug_print(f"{name} failed: {e}")  # pragma: no mutate
        raise UpstreamFailure(name, e) from e


def _guarded(operation: Callable[..., Any], name: str) -> Callable[..., Any]:
    def guarded(**params):
        return call_aws(operation, name, **params)

    return guarded


def _text(value: Optional[Any]) -> str:
    return "" if value is None else str(value)


class ResourceFetcher:
    """Drain, filter and describe one resource kind.

    Subclasses set ``kind`` and implement ``page_fetcher``,
    ``resources_from_page`` and ``candidate_fields``.
    """

    kind = ""

    def __init__(self, client: Any) -> None:
        self.client = client
        self._fetch_raw_page = self.page_fetcher()

    def page_fetcher(self) -> Callable[[Optional[str]], Page]:
        """Closure returning one raw page of the kind's list API"""
        raise NotImplementedError

    def resources_from_page(self, items: List[Any]) -> List[Any]:
        raise NotImplementedError

    def fetch_page(self, token: Optional[str]) -> Page:
        page = self._fetch_raw_page(token)
        return Page(self.resources_from_page(page.items), page.continuation)

    def candidate_fields(self, resource: Any) -> Sequence[str]:
        raise NotImplementedError

    def candidate_tags(self, resource: Any) -> Iterable[Tag]:
        return resource.tags

    def fetch_all(self) -> List[Any]:
        """Unfiltered snapshot of every resource of this kind"""
        resources = drain(self.fetch_page)
        debug_print(f"Fetched {len(resources)} {self.kind} resources")  # pragma: no mutate
        return resources

    def fetch(self, query: Optional[str] = None) -> List[Any]:
        return filter_resources(
            self.fetch_all(), query, self.candidate_fields, self.candidate_tags
        )

    def fetch_one(self, query: Optional[str] = None) -> Any:
        """Fetch the single resource matching ``query``.

        Raises:
            AmbiguousNarrowing: when zero or several resources match
        """
        resources = self.fetch(query)
        if len(resources) != 1:
            debug_print(f"Expected exactly one {self.kind}, got {len(resources)}")  # pragma: no mutate
            raise AmbiguousNarrowing(len(resources))
        return resources[0]


class InstanceFetcher(ResourceFetcher):
    kind = "instance"

    def page_fetcher(self):
        return token_page_fetcher(
            _guarded(self.client.describe_instances, "ec2:DescribeInstances"),
            "Reservations",
        )

    def resources_from_page(self, items):
        return [
            Instance.from_aws(instance)
            for reservation in items
            for instance in reservation.get("Instances") or []
        ]

    def candidate_fields(self, resource):
        return [resource.name, resource.id, resource.private_dns]

    def search(
        self,
        query: Optional[str] = None,
        exact_query: Optional[str] = None,
        ids: Optional[str] = None,
    ) -> List[Instance]:
        instances = self.fetch(query)
        instances = filter_exact(instances, exact_query, lambda instance: instance.name)
        wanted_ids = normalize_instance_ids(ids)
        if wanted_ids:
            instances = [instance for instance in instances if instance.id in wanted_ids]
            debug_print(f"Id filter {wanted_ids} kept {len(instances)} instances")  # pragma: no mutate
        return instances


class AutoScalingGroupFetcher(ResourceFetcher):
    kind = "asg"

    def page_fetcher(self):
        return token_page_fetcher(
            _guarded(
                self.client.describe_auto_scaling_groups,
                "autoscaling:DescribeAutoScalingGroups",
            ),
            "AutoScalingGroups",
        )

    def resources_from_page(self, items):
        return [AutoScalingGroup.from_aws(group) for group in items]

    def candidate_fields(self, resource):
        return [resource.name]

    def activities(self, query: Optional[str] = None) -> List[Activity]:
        group = self.fetch_one(query)
        fetch = token_page_fetcher(
            _guarded(
                self.client.describe_scaling_activities,
                "autoscaling:DescribeScalingActivities",
            ),
            "Activities",
            AutoScalingGroupName=group.name,
        )
        return [Activity.from_aws(activity) for activity in drain(fetch)]


class TargetGroupFetcher(ResourceFetcher):
    kind = "tg"

    def page_fetcher(self):
        return token_page_fetcher(
            _guarded(self.client.describe_target_groups, "elbv2:DescribeTargetGroups"),
            "TargetGroups",
            request_token="Marker",
            response_token="NextMarker",
        )

    def resources_from_page(self, items):
        return [TargetGroup.from_aws(group) for group in items]

    def candidate_fields(self, resource):
        return [resource.name, ",".join(resource.load_balancer_arns)]

    def candidate_tags(self, resource):
        return ()

    def lookup_tags(self, arns: List[str]) -> Dict[str, List[Tag]]:
        """Fetch tags for the given ARNs in consecutive batches"""
        tags_by_arn: Dict[str, List[Tag]] = {}
        for start in range(0, len(arns), TAG_BATCH_SIZE):
            batch = arns[start : start + TAG_BATCH_SIZE]
            debug_print(f"Looking up tags for {len(batch)} target groups")  # pragma: no mutate
            response = call_aws(
                self.client.describe_tags, "elbv2:DescribeTags", ResourceArns=batch
            )
            for description in response.get("TagDescriptions") or []:
                tags_by_arn[description.get("ResourceArn", "")] = tags_from_aws(
                    description.get("Tags")
                )
        return tags_by_arn

    def enrich(self, groups: List[TargetGroup]) -> List[TargetGroup]:
        """Attach tags to already filtered target groups"""
        if not groups:
            return groups
        tags_by_arn = self.lookup_tags([group.arn for group in groups])
        return [group._replace(tags=tags_by_arn.get(group.arn, [])) for group in groups]

    def health(self, query: Optional[str] = None) -> List[TargetHealth]:
        group = self.fetch_one(query)
        response = call_aws(
            self.client.describe_target_health,
            "elbv2:DescribeTargetHealth",
            TargetGroupArn=group.arn,
        )
        return [
            TargetHealth.from_aws(description)
            for description in response.get("TargetHealthDescriptions") or []
        ]


def _with_tag_columns(
    headers: List[str],
    resources: List[Any],
    columns: Callable[[Any], List[str]],
    tag_columns: Optional[str],
    show_all_tags: bool,
) -> Table:
    keys = resolve_tag_columns(
        (resource.tags for resource in resources), tag_columns, show_all_tags
    )
    rows = [columns(resource) + project_tags(resource.tags, keys) for resource in resources]
    return headers + tag_headers(headers, keys), rows


def tag_headers(headers: List[str], keys: List[str]) -> List[str]:
    """Column headers for tag keys; a key that clashes with a fixed column gets a ``tag:`` prefix"""
    return [f"tag:{key}" if key in headers else key for key in keys]


def search_instances(
    client,
    query=None,
    exact_query=None,
    ids=None,
    tag_columns=None,
    show_all_tags=False,
) -> Table:
    """Instance info view: one row per matching instance plus tag columns"""
    instances = InstanceFetcher(client).search(query, exact_query, ids)
    return _with_tag_columns(
        ["ID", "Name", "State", "Type", "AZ", "PrivateIP", "PrivateDNS"],
        instances,
        lambda i: [
            i.id,
            i.name,
            i.state,
            i.instance_type,
            i.availability_zone,
            i.private_ip,
            i.private_dns,
        ],
        tag_columns,
        show_all_tags,
    )


def search_instance_ids(client, query=None, exact_query=None, ids=None) -> Table:
    instances = InstanceFetcher(client).search(query, exact_query, ids)
    return ["ID", "Name"], [[i.id, i.name] for i in instances]


def search_instance_ips(client, query=None, exact_query=None, ids=None) -> Table:
    instances = InstanceFetcher(client).search(query, exact_query, ids)
    return ["PrivateIPs", "Name"], [[", ".join(i.private_ips), i.name] for i in instances]


def search_auto_scaling_groups(
    client, query=None, tag_columns=None, show_all_tags=False
) -> Table:
    """Auto Scaling Group info view with capacities and tag columns"""
    groups = AutoScalingGroupFetcher(client).fetch(query)
    return _with_tag_columns(
        ["Name", "Instances", "Desired", "Min", "Max"],
        groups,
        lambda g: [
            g.name,
            str(len(g.instances)),
            _text(g.desired_capacity),
            _text(g.min_size),
            _text(g.max_size),
        ],
        tag_columns,
        show_all_tags,
    )


def search_auto_scaling_activities(client, query=None) -> Table:
    """Scaling activities of the one group matching ``query``"""
    activities = AutoScalingGroupFetcher(client).activities(query)
    return ["Status", "Desc", "StartTime", "EndTime"], [
        [a.status, a.description, a.start_time, a.end_time] for a in activities
    ]


def search_auto_scaling_instances(client, query=None) -> Table:
    """Member instances of every group matching ``query``"""
    groups = AutoScalingGroupFetcher(client).fetch(query)
    rows = [
        [
            group.name,
            instance.get("InstanceId") or "",
            instance.get("LifecycleState") or "",
            instance.get("InstanceType") or "",
            instance.get("AvailabilityZone") or "",
            instance.get("HealthStatus") or "",
        ]
        for group in groups
        for instance in group.instances
    ]
    return ["ASG Name", "ID", "LifeCycle", "InstanceType", "AZ", "Status"], rows


def search_target_groups(client, query=None, tag_columns=None, show_all_tags=False) -> Table:
    """Target Group info view; tags are looked up for matching groups only"""
    fetcher = TargetGroupFetcher(client)
    groups = fetcher.enrich(fetcher.fetch(query))
    return _with_tag_columns(
        ["Name", "Protocol", "Port", "TargetType", "LoadBalancers"],
        groups,
        lambda g: [
            g.name,
            g.protocol,
            _text(g.port),
            g.target_type,
            ", ".join(name for name in g.load_balancer_names if name),
        ],
        tag_columns,
        show_all_tags,
    )


def search_target_health(client, query=None) -> Table:
    """Target health of the one target group matching ``query``"""
    targets = TargetGroupFetcher(client).health(query)
    return ["Target", "Port", "AZ", "State", "Reason"], [
        [t.target_id, _text(t.port), t.availability_zone, t.state, t.reason] for t in targets
    ]
