"""Helpers for reading names out of Elastic Load Balancing ARNs."""

import re

ALB_NAME_PATTERN = re.compile(r"loadbalancer/app/([^/]+)")
NLB_NAME_PATTERN = re.compile(r"loadbalancer/net/([^/]+)")


def extract_lb_name(arn):
    """Extract the load balancer name from its ARN.

    Examples:
        >>> extract_lb_name("arn:aws:elasticloadbalancing:us-west-2:123:loadbalancer/app/api-alb/abcdef")
        'api-alb'
        >>> extract_lb_name("arbitrary-string")
        ''
    """
    if not arn:
        return ""
    for pattern in (ALB_NAME_PATTERN, NLB_NAME_PATTERN):
        match = pattern.search(arn)
        if match:
            return match.group(1)
    return ""
