# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

SECONDS_PER_MINUTE = 60

# Extra time given to hammerdbcli's own timers before the run script gives up.
WAIT_BUFFER_SECONDS = 180

# Marker HammerDB prints in front of the NOPM/TPM result line.
RESULT_MARKER = "TEST RESULT :"

DATA_DIR_NAME = "data.tpcc"
SERVER_LOG_NAME = "server.log"
INITDB_LOG_NAME = "initdb.log"
INIT_SQL_LOG_NAME = "init_sql.log"

BUILD_SCHEMA_SCRIPT_NAME = "pg_tpcc_schemabuild.tcl"
RUN_SCRIPT_NAME = "pg_tpcc_benchmark.tcl"

CYCLE_CONFIG_NAME = "cycle_config.json"

BANNER_WIDTH = 80
