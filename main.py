# main.py
import sys

from garage_sim.app.build import build


def run(destination: str = "showroom", start: int = 0):
    app = build()

    route = app.navigation.navigate(start, destination)
    print(f"Optimal path found ({route.steps} steps):")
    for line in app.navigation.describe(route):
        print(f"  {line}")

    # Report for every vehicle in the fleet
    for i in range(len(app.vehicles)):
        app.performance.report(i)


if __name__ == "__main__":
    run(*sys.argv[1:2])
