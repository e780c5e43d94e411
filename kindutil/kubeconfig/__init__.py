"""Reading, merging, writing and pruning kubeconfig files."""