from uav_flyover_graph.app import main

if __name__ == "__main__":
    main()
