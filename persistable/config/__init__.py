##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
The `config` package locates and reads Persistable's `app.yaml` configuration.

Modules:
    configfile.py: Config file locations, finding, loading and defaulting the configuration.
    backend_config.py: Turning the configuration into a backend instance.
"""
