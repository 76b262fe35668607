"""Pytest fixtures for osm2mif tests."""
import pytest


def write_osm(tmp_path, body, name="input.osm"):
    """Write an OSM file around the given element lines (no blank lines)."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', '<osm version="0.6">']
    lines.extend(line for line in body.strip().splitlines() if line.strip())
    lines.append('</osm>')
    file = tmp_path / name
    file.write_text('\n'.join(lines) + '\n')
    return file


def write_rules(tmp_path, content, name="rules.txt"):
    """Write a rule description file."""
    file = tmp_path / name
    file.write_text(content)
    return file


@pytest.fixture
def make_osm(tmp_path):
    """Factory writing OSM element lines to a file under tmp_path."""
    def _make(body, name="input.osm"):
        return write_osm(tmp_path, body, name)
    return _make


@pytest.fixture
def make_rules(tmp_path):
    """Factory writing a rule description under tmp_path."""
    def _make(content, name="rules.txt"):
        return write_rules(tmp_path, content, name)
    return _make


@pytest.fixture
def junction_osm_file(tmp_path):
    """Create OSM file with a residential way sharing its middle node.

    Way 100 runs A(1) -> B(2) -> C(3); way 200 also uses B, so B is a
    junction. Way 300 is a footway with no shared nodes.
    """
    return write_osm(tmp_path, '''
  <node id="1" lat="51.50" lon="-0.10"/>
  <node id="2" lat="51.51" lon="-0.10"/>
  <node id="3" lat="51.51" lon="-0.09"/>
  <node id="4" lat="51.52" lon="-0.10"/>
  <node id="5" lat="51.60" lon="-0.20"/>
  <node id="6" lat="51.61" lon="-0.20"/>
  <way id="100">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="highway" v="residential"/>
    <tag k="name" v="Main Street"/>
  </way>
  <way id="200">
    <nd ref="2"/>
    <nd ref="4"/>
    <tag k="highway" v="primary"/>
  </way>
  <way id="300">
    <nd ref="5"/>
    <nd ref="6"/>
    <tag k="highway" v="footway"/>
  </way>
''')


@pytest.fixture
def restriction_osm_file(tmp_path):
    """Create OSM file with a no-right-turn restriction.

    Way 10 heads north from node 1 to the via node 2. Way 20 leaves node 2
    to the east (a right turn), way 30 leaves it to the west (a left turn).
    Both are restricted from way 10.
    """
    return write_osm(tmp_path, '''
  <node id="1" lat="0.0" lon="0.0"/>
  <node id="2" lat="1.0" lon="0.0"/>
  <node id="3" lat="1.0" lon="1.0"/>
  <node id="4" lat="1.0" lon="-1.0"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <tag k="highway" v="primary"/>
  </way>
  <way id="20">
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="highway" v="primary"/>
  </way>
  <way id="30">
    <nd ref="2"/>
    <nd ref="4"/>
    <tag k="highway" v="primary"/>
  </way>
  <relation id="500">
    <member type="way" ref="10" role="from"/>
    <member type="node" ref="2" role="via"/>
    <member type="way" ref="20" role="to"/>
    <tag k="type" v="restriction"/>
    <tag k="restriction" v="no_right_turn"/>
  </relation>
  <relation id="501">
    <member type="way" ref="10" role="from"/>
    <member type="node" ref="2" role="via"/>
    <member type="way" ref="30" role="to"/>
    <tag k="type" v="restriction"/>
    <tag k="restriction" v="no_left_turn"/>
  </relation>
''')


@pytest.fixture
def empty_osm_file(tmp_path):
    """Create OSM file without elements."""
    return write_osm(tmp_path, '', name="empty.osm")


@pytest.fixture
def highway_rules_file(tmp_path):
    """Create rule description with a mandatory highway key."""
    return write_rules(tmp_path, '''// roads
mk="highway" iv="residential" mif_type="Pline" iv="primary" style="Pen (3,2,255)"
k="name" iv="*"
''')


@pytest.fixture
def rule_table(highway_rules_file):
    """Create RuleTable from the highway rules."""
    from mif_core.rules.rule_parser import load_rule_table
    return load_rule_table(highway_rules_file)


@pytest.fixture
def sample_record():
    """Create sample MifRecord."""
    from mif_core.models.features import MifRecord
    return MifRecord(
        way_id=100,
        geometry_type='Pline',
        style='Pen (2,54,32768)',
        coordinates=[(51.5, -0.1), (51.51, -0.1)],
        values={'highway': 'residential', 'name': 'Main Street'},
        restrictions=''
    )
