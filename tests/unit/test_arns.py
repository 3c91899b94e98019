import pytest

from awssearch.arns import extract_lb_name

PREFIX = "arn:aws:elasticloadbalancing:us-west-2:123456789012:"


@pytest.mark.unit
class TestExtractLbName:
    @pytest.mark.parametrize(
        "arn,expected",
        [
            (PREFIX + "loadbalancer/app/api-alb/abcdef", "api-alb"),
            (PREFIX + "loadbalancer/net/api-alb/abcdef", "api-alb"),
            ("loadbalancer/app/api-alb/abcdef/extra/segments", "api-alb"),
            ("loadbalancer/app/api-alb", "api-alb"),
            (PREFIX + "loadbalancer/gwy/gw-lb/abcdef", ""),
            (PREFIX + "targetgroup/api-tg/abcdef", ""),
            ("arbitrary-string", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_extract(self, arn, expected):
        assert extract_lb_name(arn) == expected
