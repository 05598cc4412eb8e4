"""Built-in mission template catalog.

Stationary actions (hover, sample) carry the speed used to fly on to the
next waypoint, so every template route can be estimated.
"""

from flood_mission_planner.exceptions.client_errors import NotFoundError
from flood_mission_planner.mission.models import (
    MissionTemplate,
    TemplateCategory,
    TemplateWaypoint,
    WaypointAction,
    WaypointParameters,
)

FLOOD_SURVEY = MissionTemplate(
    template_id="template_flood_survey",
    name="Flood Area Survey",
    description="Comprehensive flood zone assessment with water level sampling",
    category=TemplateCategory.SURVEY,
    waypoints=(
        TemplateWaypoint(action=WaypointAction.TRANSIT, speed=12, altitude=50),
        TemplateWaypoint(
            action=WaypointAction.SURVEY,
            duration_seconds=120,
            speed=6,
            altitude=30,
            parameters=WaypointParameters(capture_photos=True, sample_depth=True),
        ),
        TemplateWaypoint(
            action=WaypointAction.SAMPLE,
            duration_seconds=30,
            speed=5,
            altitude=15,
            parameters=WaypointParameters(sensor_reading=True),
        ),
        TemplateWaypoint(action=WaypointAction.TRANSIT, speed=12, altitude=50),
    ),
    estimated_area_square_kilometers=2.5,
    recommended_altitude=30,
)

PERIMETER_PATROL = MissionTemplate(
    template_id="template_perimeter_patrol",
    name="Perimeter Patrol",
    description="Systematic boundary patrol with anomaly detection",
    category=TemplateCategory.PATROL,
    waypoints=(
        TemplateWaypoint(action=WaypointAction.TRANSIT, speed=10, altitude=40),
        TemplateWaypoint(
            action=WaypointAction.LOITER,
            duration_seconds=60,
            speed=8,
            altitude=35,
            parameters=WaypointParameters(capture_photos=True),
        ),
        TemplateWaypoint(action=WaypointAction.TRANSIT, speed=10, altitude=40),
    ),
    recommended_altitude=35,
)

EMERGENCY_RESPONSE = MissionTemplate(
    template_id="template_emergency_response",
    name="Emergency Response",
    description="Rapid deployment for emergency situations",
    category=TemplateCategory.EMERGENCY,
    waypoints=(
        TemplateWaypoint(action=WaypointAction.TRANSIT, speed=15, altitude=60),
        TemplateWaypoint(
            action=WaypointAction.HOVER,
            duration_seconds=180,
            speed=5,
            altitude=25,
            parameters=WaypointParameters(capture_photos=True, video_duration_seconds=180),
        ),
        TemplateWaypoint(
            action=WaypointAction.SAMPLE,
            duration_seconds=45,
            speed=5,
            altitude=20,
            parameters=WaypointParameters(sensor_reading=True),
        ),
    ),
    recommended_altitude=25,
)

CONTINUOUS_MONITOR = MissionTemplate(
    template_id="template_continuous_monitor",
    name="Continuous Monitoring",
    description="Long-term area monitoring with regular data collection",
    category=TemplateCategory.MONITORING,
    waypoints=(
        TemplateWaypoint(action=WaypointAction.TRANSIT, speed=8, altitude=45),
        TemplateWaypoint(
            action=WaypointAction.LOITER,
            duration_seconds=300,
            speed=5,
            altitude=40,
            parameters=WaypointParameters(capture_photos=True, sensor_reading=True),
        ),
        TemplateWaypoint(
            action=WaypointAction.SAMPLE,
            duration_seconds=60,
            speed=5,
            altitude=25,
            parameters=WaypointParameters(sample_depth=True),
        ),
    ),
    recommended_altitude=40,
)

MISSION_TEMPLATES: tuple[MissionTemplate, ...] = (
    FLOOD_SURVEY,
    PERIMETER_PATROL,
    EMERGENCY_RESPONSE,
    CONTINUOUS_MONITOR,
)


def get_template(template_id: str) -> MissionTemplate:
    """Look up a built-in template.

    Raises:
        NotFoundError: If no template has the given id.
    """
    for template in MISSION_TEMPLATES:
        if template.template_id == template_id:
            return template
    raise NotFoundError(
        f"Template {template_id} not found",
        resource_type="MissionTemplate",
        resource_id=template_id,
    )
