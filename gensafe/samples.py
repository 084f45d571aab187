"""Example system descriptions served by /api/analysis/examples and shown on 400s."""

STRUCTURED_FORMAT_EXAMPLE = {
    "systemName": "Forward-Facing Lidar Unit",
    "description": "Scans environment to detect obstacles",
    "components": [
        {"name": "Laser Emitter", "function": "Emits laser pulses"},
        {"name": "Processing Unit", "function": "Calculates distance from raw data"},
    ],
}

SIMPLE_FORMAT_EXAMPLE = {
    "description": (
        "A brake system for an autonomous vehicle consisting of brake pedal, master cylinder, "
        "brake lines, and brake pads..."
    ),
}

EXAMPLES = {
    "structured": {
        "automotive": {
            "systemName": "Automotive Brake System",
            "description": "Hydraulic brake system for passenger vehicle with ABS capability",
            "components": [
                {"name": "Brake Pedal", "function": "Receives driver input force"},
                {"name": "Master Cylinder", "function": "Converts pedal force to hydraulic pressure"},
                {"name": "Brake Lines", "function": "Transmit hydraulic pressure to wheels"},
                {"name": "Brake Calipers", "function": "Apply clamping force to brake discs"},
                {"name": "ABS Controller", "function": "Prevents wheel lockup during braking"},
            ],
            "connections": [
                {"from": "Brake Pedal", "to": "Master Cylinder", "description": "Mechanical linkage"},
                {"from": "Master Cylinder", "to": "Brake Lines", "description": "Hydraulic fluid under pressure"},
                {"from": "Brake Lines", "to": "Brake Calipers", "description": "Pressurized brake fluid"},
            ],
            "operatingConditions": {
                "temperature": "-40°C to +85°C",
                "pressure": "0 to 180 bar",
                "environment": "Automotive under-hood and wheel well",
            },
            "safetyStandards": ["ISO 26262"],
        },
        "aerospace": {
            "systemName": "Aircraft Navigation System",
            "description": "Primary navigation system for commercial aircraft",
            "components": [
                {"name": "GPS Receiver", "function": "Receives satellite positioning signals"},
                {"name": "Inertial Navigation Unit", "function": "Provides position data when GPS unavailable"},
                {"name": "Flight Management Computer", "function": "Processes navigation data and flight plans"},
                {"name": "Display Unit", "function": "Shows navigation information to pilots"},
            ],
            "connections": [
                {"from": "GPS Receiver", "to": "Flight Management Computer", "description": "Digital position data"},
                {"from": "Inertial Navigation Unit", "to": "Flight Management Computer",
                 "description": "Backup position data"},
                {"from": "Flight Management Computer", "to": "Display Unit",
                 "description": "Processed navigation display data"},
            ],
            "safetyStandards": ["DO-178C", "ARP4754A"],
        },
    },
    "simple": {
        "automotive": (
            "A forward-facing lidar sensor system for an autonomous ground vehicle. The system includes a "
            "laser emitter that sends out pulses, a rotating mirror that directs the laser across the field "
            "of view, a receiver that detects reflected pulses, and a processing unit that calculates "
            "distances and creates point cloud data. The system operates on 24V DC power and communicates "
            "with the main vehicle computer via Ethernet to provide obstacle detection capabilities."
        ),
        "industrial": (
            "A chemical reactor temperature control system consisting of temperature sensors, a PID "
            "controller, control valves, and heating/cooling elements. The system maintains reactor "
            "temperature within specified limits to ensure safe chemical processes and prevent runaway "
            "reactions."
        ),
        "medical": (
            "A patient monitoring system that tracks vital signs including heart rate, blood pressure, "
            "oxygen saturation, and temperature. The system includes sensors, signal processing units, "
            "display monitors, and alarm systems to alert medical staff of critical changes in patient "
            "condition."
        ),
    },
}

USAGE = {
    "structured": "Use for detailed component-level analysis with specific safety standards",
    "simple": "Use for quick analysis of systems described in natural language",
}
