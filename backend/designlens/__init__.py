"""DesignLens — design feasibility analysis backend."""
