# tests/conftest.py
import ipaddress
import textwrap

import pytest

from subnetcheck.models import Network, Subnet


@pytest.fixture
def net1():
    return Network(
        name="net1",
        subnets=[Subnet(subnet=ipaddress.ip_network("10.0.0.0/24"))],
    )


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "networks.yml"
    path.write_text(textwrap.dedent("""\
        used_subnets:
          - 192.168.1.0/24
        networks:
          - name: podman1
            subnets:
              - subnet: 10.89.0.7/24
                lease_range:
                  start_ip: 10.89.0.10
                  end_ip: 10.89.0.200
          - name: backend
            internal: true
            labels:
              tier: db
            subnets:
              - subnet: 10.90.0.0/24
              - subnet: fd00:90::/64
    """))
    return path
